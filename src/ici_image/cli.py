"""Command line interface for ICI images and palettes."""

from __future__ import annotations

import argparse
import sys
import warnings
from pathlib import Path
from typing import List

from .errors import IndexedImageError
from .file import file_type_of, load, save
from .jasc import load_jasc, save_jasc
from .palette import describe_palette
from .pil import PALETTE_MODES, ConversionError, ConvertOptions, convert_png_to_ici, render_image


def ensure_writable(paths: List[Path], force: bool) -> None:
    conflicts = [str(path) for path in paths if path.exists() and not force]
    if conflicts:
        raise ConversionError(
            "Output files already exist (use --force to overwrite):\n" + "\n".join(conflicts)
        )


def cmd_info(args: argparse.Namespace) -> None:
    wrapper = load(args.input)
    print(f"type: {file_type_of(wrapper).label}")
    print(f"size: {wrapper.width}x{wrapper.height}")
    print(f"frames: {wrapper.frame_count}")
    if wrapper.is_animated():
        print(f"frame duration: {wrapper.image.frame_duration:g}s")
    print(f"palette: {describe_palette(wrapper.palette)}")
    print(f"colors in use: {wrapper.min_palette_size_supported()}")


def cmd_from_png(args: argparse.Namespace) -> None:
    options = ConvertOptions()
    options.palette_mode = args.palette
    options.palette_id = args.palette_id
    options.palette_name = args.palette_name
    options.max_colors = args.max_colors

    output = Path(args.output)
    ensure_writable([output], args.force)
    image = convert_png_to_ici(args.input, options)
    save(output, image)
    print(f"wrote {output}")


def cmd_to_png(args: argparse.Namespace) -> None:
    wrapper = load(args.input)
    output_dir = Path(args.output_dir)
    stem = Path(args.input).stem
    frames = wrapper.as_images()
    if len(frames) == 1:
        names = [f"{stem}.png"]
    else:
        names = [f"{stem}_{idx:03d}.png" for idx in range(len(frames))]
    targets = [output_dir / name for name in names]
    ensure_writable(targets, args.force)

    output_dir.mkdir(parents=True, exist_ok=True)
    for frame, target in zip(frames, targets):
        render_image(frame).save(target)
        print(f"wrote {target}")


def cmd_export_jasc(args: argparse.Namespace) -> None:
    wrapper = load(args.input)
    output = Path(args.output)
    ensure_writable([output], args.force)
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        save_jasc(output, wrapper.colors)
    for warning in caught:
        print(f"Warning: {warning.message}")
    print(f"wrote {output}")


def cmd_import_jasc(args: argparse.Namespace) -> None:
    wrapper = load(args.input)
    palette = load_jasc(args.pal)
    output = Path(args.output)
    ensure_writable([output], args.force)
    wrapper.set_palette(palette.to_palette())
    save(output, wrapper)
    print(f"wrote {output}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Inspect and convert ICI indexed-color images (.ici / .ica) and JASC palettes.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    info = sub.add_parser("info", help="Print size, frame and palette information")
    info.add_argument("input", help="ICI file")
    info.set_defaults(func=cmd_info)

    from_png = sub.add_parser("from-png", help="Convert a PNG into a static ICI image")
    from_png.add_argument("input", help="PNG file (non palette images are quantized)")
    from_png.add_argument("-o", "--output", required=True, help="Destination .ici file")
    from_png.add_argument(
        "--palette",
        choices=PALETTE_MODES,
        default="colors",
        help="How the palette is stored in the output",
    )
    from_png.add_argument("--palette-id", type=int, help="Palette id for --palette id (0-65535)")
    from_png.add_argument("--palette-name", help="Palette name for --palette name")
    from_png.add_argument(
        "--max-colors",
        type=int,
        default=255,
        help="Color count used when quantizing non palette images (2-255)",
    )
    from_png.add_argument("-f", "--force", action="store_true", help="Overwrite existing files")
    from_png.set_defaults(func=cmd_from_png)

    to_png = sub.add_parser("to-png", help="Render every frame of an ICI file to PNG")
    to_png.add_argument("input", help="ICI file")
    to_png.add_argument("-o", "--output-dir", required=True, help="Destination directory")
    to_png.add_argument("-f", "--force", action="store_true", help="Overwrite existing files")
    to_png.set_defaults(func=cmd_to_png)

    export_jasc = sub.add_parser("export-jasc", help="Write the image colors as a JASC-PAL file")
    export_jasc.add_argument("input", help="ICI file")
    export_jasc.add_argument("-o", "--output", required=True, help="Destination .pal file")
    export_jasc.add_argument("-f", "--force", action="store_true", help="Overwrite existing files")
    export_jasc.set_defaults(func=cmd_export_jasc)

    import_jasc = sub.add_parser("import-jasc", help="Replace the palette of an ICI file with a JASC-PAL file")
    import_jasc.add_argument("input", help="ICI file")
    import_jasc.add_argument("--pal", required=True, help="JASC-PAL file")
    import_jasc.add_argument("-o", "--output", required=True, help="Destination ICI file")
    import_jasc.add_argument("-f", "--force", action="store_true", help="Overwrite existing files")
    import_jasc.set_defaults(func=cmd_import_jasc)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        args.func(args)
        return 0
    except IndexedImageError as exc:
        print(exc, file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"I/O error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
