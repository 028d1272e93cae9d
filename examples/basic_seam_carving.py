"""
Basic seam carving example.

Shows the energy maps of an image, the first seam that would be removed,
and the result of carving the image down by a number of seams.

    python basic_seam_carving.py path/to/image.jpg --seams 100
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import torch
import matplotlib.pyplot as plt

from seamcarver import (SeamCarver, find_seam, gradient_energy, load_image,
                        luminance, normalize_energy, save_image)


def visualize_seam(pixels: torch.Tensor, seam: torch.Tensor) -> torch.Tensor:
    """Paint a vertical seam red on a copy of an RGBA image."""
    img_vis = pixels.clone()
    rows = torch.arange(pixels.shape[0])
    img_vis[rows, seam] = torch.tensor([255, 0, 0, 255], dtype=torch.uint8)
    return img_vis


def main():
    parser = argparse.ArgumentParser(description="Basic seam carving demo")
    parser.add_argument('image', type=str, help='Input image')
    parser.add_argument('--seams', type=int, default=100, help='Seams to remove (default: 100)')
    parser.add_argument('--output-dir', type=str, default='output',
                        help='Directory for results (default: output)')
    args = parser.parse_args()

    out_dir = Path(args.output_dir)

    print("Loading image...")
    buffer = load_image(args.image)
    original = buffer.pixels.clone()
    print(f"Image shape: {buffer.height} x {buffer.width}")

    print("Computing energy...")
    lum = luminance(buffer)
    energy = gradient_energy(lum)

    seam = find_seam(buffer)
    save_image(out_dir / 'with_seam.png', visualize_seam(original, seam))

    print(f"Carving image (removing {args.seams} seams)...")
    carver = SeamCarver(buffer)
    carver.carve(args.seams)
    save_image(out_dir / 'carved.png', carver.buffer)

    fig, axes = plt.subplots(1, 4, figsize=(16, 4))
    axes[0].imshow(original.numpy())
    axes[0].set_title(f'Original ({original.shape[1]}x{original.shape[0]})')
    axes[1].imshow(lum.numpy(), cmap='gray', vmin=0, vmax=1)
    axes[1].set_title('Luminance')
    axes[2].imshow(normalize_energy(energy).numpy(), cmap='gray')
    axes[2].set_title('Gradient energy')
    axes[3].imshow(carver.current().numpy())
    axes[3].set_title(f'Carved ({carver.width}x{carver.height})')
    for ax in axes:
        ax.axis('off')

    plt.tight_layout()
    plt.savefig(out_dir / 'comparison.png')
    plt.close()

    print(f"\nDone! Check the {out_dir}/ directory for results.")


if __name__ == '__main__':
    main()
