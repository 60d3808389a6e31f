"""
Example: editing an image with tonekit.

Demonstrates:
- Loading an image into an editor session
- Adjusting sliders (debounced) and flushing the re-filter
- Applying a preset and saving a custom look as JSON
- Switching to the split view and exporting

Usage:
    python examples/edit_image.py input.jpg [output.png]

Without arguments a synthetic gradient is edited instead.
"""

import logging
import sys
from pathlib import Path

import numpy as np

from tonekit import (
    EditorController,
    FilterParameters,
    PixelBuffer,
    ThemeStore,
    ViewMode,
    save_image,
    save_params_json,
)

# Configure logging to see decode, apply and export messages
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")


def generate_gradient(width: int = 320, height: int = 200) -> PixelBuffer:
    """Generate a horizontal hue-ish gradient for demonstration."""
    x = np.linspace(0.0, 255.0, width)
    y = np.linspace(0.0, 255.0, height)[:, None]
    rgb = np.stack(
        [np.broadcast_to(x, (height, width)), np.broadcast_to(y, (height, width)), 255.0 - (x + y) / 2],
        axis=-1,
    )
    return PixelBuffer.from_array(rgb)


def main():
    output_dir = Path("tonekit_example_output")
    output_dir.mkdir(exist_ok=True)

    editor = EditorController(theme_store=ThemeStore(output_dir / "theme.json"))

    if len(sys.argv) > 1:
        editor.load_image(sys.argv[1])
    else:
        editor.load_buffer(generate_gradient(), source="gradient")
    output = Path(sys.argv[2]) if len(sys.argv) > 2 else output_dir / "edited.png"

    # 1. Slider drag: many updates, one re-filter
    print("\n1. Slider adjustments")
    for value in range(0, 31, 5):
        editor.set_parameter("contrast", value)
    editor.set_parameter("temperature", 20)
    editor.flush()
    print(f"   Current: {editor.params!r}")

    # 2. Preset
    print("\n2. Preset")
    editor.load_preset("vintage")
    editor.flush()
    print(f"   Vintage: {editor.params!r}")

    # 3. Save a custom look
    look = FilterParameters(exposure=10, saturation=-40, sepia=25)
    save_params_json(look, output_dir / "look.json")
    editor.set_parameters(look)
    editor.flush()
    print(f"\n3. Custom look saved to {output_dir / 'look.json'}")

    # 4. Split view preview, dark theme
    print("\n4. Split view")
    if editor.theme.value == "light":
        editor.toggle_theme()
    view = editor.set_view_mode(ViewMode.SPLIT)
    save_image(view.frame, output_dir / "split_preview.png")
    print(f"   Divider at x={view.overlay.x}, left={view.overlay.left_width}, right={view.overlay.right_width}")

    # 5. Export the filtered image
    path = editor.export(output)
    print(f"\n5. Exported filtered image to {path}")

    editor.close()


if __name__ == "__main__":
    main()
