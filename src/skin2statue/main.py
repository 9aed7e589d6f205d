import argparse
import logging
import multiprocessing
import os
import sys
from typing import List, Optional, Tuple

from .config import ConversionConfig
from .color_modes import ColorMode
from .converter import ConversionResult, StatueConverter
from .encoders import ENCODERS, OutputFormat
from .errors import ConfigurationError, SchematicError, SkinStatueError
from .geometry.orientation import Direction
from .skin_loader import SkinLoader


def output_path_for(input_path: str, output: Optional[str], output_format: OutputFormat) -> str:
    """
    No output: "<skin> output/<skin>.<ext>" next to the working directory.
    A directory (existing, or ending in a separator): "<dir>/<skin>.<ext>".
    Anything else is used as the file name.
    """
    base_name = os.path.basename(input_path).rsplit(".", 1)[0]
    file_name = base_name + ENCODERS[output_format].extension

    if not output:
        output_dir = f"{base_name} output"
        os.makedirs(output_dir, exist_ok=True)
        return os.path.join(output_dir, file_name)
    if os.path.isdir(output) or output.endswith(os.sep):
        os.makedirs(output, exist_ok=True)
        return os.path.join(output, file_name)
    return output


def write_output(input_path: str, output_path: Optional[str], result: ConversionResult) -> str:
    try:
        final_output = output_path_for(input_path, output_path, result.format)
        with open(final_output, "wb") as f:
            f.write(result.data)
    except OSError as e:
        raise SchematicError(f"Failed to write output for {input_path}: {e}") from e
    return final_output


def process_skin(input_path: str, output_path: Optional[str], config: ConversionConfig,
                 model: str = "auto") -> bool:
    """Converts one skin and writes the result. Returns False on failure."""
    try:
        skin_img = SkinLoader.load_skin(input_path)
    except SkinStatueError as e:
        print(f"Error loading skin {os.path.basename(input_path)}: {e}")
        return False

    slim = None if model == "auto" else model == "slim"
    base_name = os.path.basename(input_path).rsplit(".", 1)[0]
    if config.name == ConversionConfig.name:
        config = config.replace(name=f"Statue_{base_name}")

    try:
        result = StatueConverter(config).convert(skin_img, slim=slim)
    except SkinStatueError as e:
        print(f"Error processing {input_path}: {e}")
        return False

    if result.is_empty:
        print(f"Skipping {input_path}: no visible pixels")
        return False

    try:
        final_output = write_output(input_path, output_path, result)
    except SchematicError as e:
        print(f"Error saving {input_path}: {e}")
        return False

    w, h, l = result.dimensions
    print(f"Saved {final_output}: {result.block_count} blocks, "
          f"{result.unique_block_count} unique, {w}x{h}x{l}")
    return True


def process_skin_wrapper(args: Tuple[str, Optional[str], ConversionConfig, str]) -> bool:
    # Each worker builds its own converter and matcher
    input_path, output_path, config, model = args
    return process_skin(input_path, output_path, config, model)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Convert Minecraft skins to block statues.")
    parser.add_argument("-i", "--input", required=True, help="Skin file, directory, URL or player name")
    parser.add_argument("-o", "--output", help="Output directory or file")
    parser.add_argument("-f", "--format", choices=[f.value for f in OutputFormat],
                        help="Output format (default: schem)")
    parser.add_argument("-m", "--mode", choices=[m.value for m in ColorMode],
                        help="Color matching mode (default: lab)")
    parser.add_argument("--model", default="auto", choices=["auto", "classic", "slim"], help="Arm model")
    parser.add_argument("--scale", type=float, help="Blocks per skin pixel")
    parser.add_argument("--direction", choices=[d.value for d in Direction], help="Facing direction")
    parser.add_argument("--offset", type=int, nargs=3, metavar=("X", "Y", "Z"), help="Position offset")
    parser.add_argument("--flip-h", action="store_true", help="Mirror along X")
    parser.add_argument("--flip-v", action="store_true", help="Mirror along Y")
    parser.add_argument("--exact", action="store_true", help="Never fall back to the other alpha partition")
    parser.add_argument("--allow-falling", action="store_true", help="Allow sand, gravel and concrete powder")
    parser.add_argument("--no-overlay", action="store_true", help="Ignore the second skin layer")
    parser.add_argument("--config", help="JSON file with conversion settings")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def config_from_args(args: argparse.Namespace) -> ConversionConfig:
    config = ConversionConfig.load(args.config) if args.config else ConversionConfig()

    changes = {}
    if args.format:
        changes["output_format"] = OutputFormat(args.format)
    if args.mode:
        changes["color_mode"] = ColorMode(args.mode)
    if args.scale is not None:
        changes["scale"] = args.scale
    if args.direction:
        changes["direction"] = Direction(args.direction)
    if args.offset:
        changes["offset"] = tuple(args.offset)
    if args.flip_h:
        changes["flip_horizontal"] = True
    if args.flip_v:
        changes["flip_vertical"] = True
    if args.exact:
        changes["exact_mode"] = True
    if args.allow_falling:
        changes["exclude_falling_blocks"] = False
    if args.no_overlay:
        changes["include_overlay"] = False
    return config.replace(**changes)


def collect_inputs(input_path: str) -> List[str]:
    if os.path.isdir(input_path):
        return sorted(
            os.path.join(input_path, f) for f in os.listdir(input_path) if f.lower().endswith(".png")
        )
    # Files, URLs and player names all go through the loader
    return [input_path]


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = config_from_args(args)
    except ConfigurationError as e:
        print(f"Error: {e}")
        return 2

    errors = config.validate()
    if errors:
        for error in errors:
            print(f"Error: {error}")
        return 2

    files_to_process = collect_inputs(args.input)
    if not files_to_process:
        print("No valid input files found.")
        return 1

    if len(files_to_process) == 1:
        return 0 if process_skin(files_to_process[0], args.output, config, args.model) else 1

    # Use up to 8 cores, leave 1 free
    workers = max(1, min(multiprocessing.cpu_count() - 1, 8))
    print(f"Batch processing {len(files_to_process)} skins using {workers} workers...")

    tasks = [(f, args.output, config, args.model) for f in files_to_process]
    if workers > 1:
        with multiprocessing.Pool(processes=workers) as pool:
            results = pool.map(process_skin_wrapper, tasks)
    else:
        results = [process_skin_wrapper(task) for task in tasks]

    success_count = sum(1 for ok in results if ok)
    print(f"Done: {success_count}/{len(files_to_process)} succeeded.")
    return 0 if success_count == len(files_to_process) else 1


if __name__ == "__main__":
    sys.exit(main())
