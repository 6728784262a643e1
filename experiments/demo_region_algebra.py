"""
Demo: Point Set Algebra

Builds balls and boxes, combines them with union / intersection /
difference, prints their sizes and bounds, and saves an overlay image.

Usage:
    python experiments/demo_region_algebra.py --radius 20 --output experiments/outputs/regions.png
"""

import sys

sys.path.append("..")

import argparse
from pathlib import Path

import cv2
import numpy as np

from regions import (
    ArrayGrid,
    BallPointSet,
    HyperVolumePointSet,
    neighborhood_mean,
    region_stats,
    render_pointset,
)


def create_test_image(size=(128, 128)):
    """Create a grey test image with a gradient and a bright disk."""
    img = np.zeros(size, dtype=np.uint8)

    # Add a gradient background
    for i in range(size[0]):
        img[i, :] = i * 255 // size[0]

    cv2.circle(img, (size[1] // 2, size[0] // 2), size[0] // 6, 255, -1)

    return img


def describe(name, pointset):
    """Print size and bounding box of a point set."""
    print(f"{name:>14}: size={pointset.calc_size():6d}  "
          f"bounds={pointset.find_bound_min()}..{pointset.find_bound_max()}")


def main():
    parser = argparse.ArgumentParser(description="Point set algebra demo")
    parser.add_argument("--radius", type=int, default=20, help="Ball radius")
    parser.add_argument("--size", type=int, default=128, help="Image height and width")
    parser.add_argument("--output", type=str, default="experiments/outputs/regions.png")
    args = parser.parse_args()

    print("=" * 60)
    print("Point Set Algebra")
    print("=" * 60)

    c = args.size // 2
    left = BallPointSet((c, c - args.radius // 2), args.radius)
    right = BallPointSet((c, c + args.radius // 2), args.radius)
    box = HyperVolumePointSet((c - args.radius, c - 5), (c + args.radius, c + 5))

    union = left | right
    lens = left & right
    crescent = left - right
    cut = union - box

    describe("left", left)
    describe("right", right)
    describe("union", union)
    describe("intersection", lens)
    describe("difference", crescent)
    describe("union - box", cut)

    overlap = sum(1 for p in left.iterator() if right.includes(p))
    print(f"\n|left| + |right| - overlap = "
          f"{left.calc_size() + right.calc_size() - overlap} (union: {union.calc_size()})")

    image = create_test_image((args.size, args.size))
    stats = region_stats(ArrayGrid(image), lens)
    print(f"\nIntersection stats: count={stats.count} mean={stats.mean:.1f} "
          f"min={stats.min:.0f} max={stats.max:.0f}")

    smoothed = neighborhood_mean(image[::4, ::4], radius=2)
    print(f"Smoothed (downsampled) image range: {smoothed.min():.1f}..{smoothed.max():.1f}")

    viz = render_pointset(cut, image.shape, image=image, color=(255, 255, 0), alpha=0.6)
    viz = render_pointset(lens, image.shape, image=viz, color=(255, 0, 255), alpha=0.6)

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    cv2.imwrite(str(output), cv2.cvtColor(viz, cv2.COLOR_RGB2BGR))
    print(f"\nSaved: {output}")


if __name__ == "__main__":
    main()
