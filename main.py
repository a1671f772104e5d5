#!/usr/bin/env python
"""
Sunflower CLI - A stem that reaches for the sun

Usage:
    python main.py [options]

Examples:
    python main.py                              # Record a GIF with an orbiting sun
    python main.py --motion sweep --frames 240  # Longer sweep
    python main.py --preset tall_stem -o tall.gif
    python main.py --preview                    # Interactive window (requires pygame)
"""

import argparse
import logging
import sys
from pathlib import Path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="A multi-segment stem that follows the sun with FABRIK inverse kinematics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Pointer Motions (headless recording):
  orbit     - Sun circles the middle of the canvas
  sweep     - Sun eases from the top-left to the bottom-right and back
  fixed     - Sun target parked above the stem

Examples:
  %(prog)s                                   # sunflower.gif, orbiting sun
  %(prog)s --format frames -o out/           # Numbered PNGs
  %(prog)s --gap 150 --motion sweep          # Wide head gap
  %(prog)s --config scene.yaml               # Load scene settings
  %(prog)s --list-presets                    # Show all presets
  %(prog)s --preview --audio song.mp3        # Live window with soundtrack
        """
    )

    parser.add_argument(
        '-o', '--output',
        type=str,
        default=None,
        help='Output path (default: sunflower.gif, sunflower.png or sunflower_frames/)'
    )

    parser.add_argument(
        '-f', '--frames',
        type=int,
        default=120,
        help='Number of frames to record (default: 120)'
    )

    parser.add_argument(
        '--format',
        type=str,
        default='gif',
        choices=['gif', 'frames', 'png'],
        help='Output format (default: gif)'
    )

    parser.add_argument(
        '-m', '--motion',
        type=str,
        default=None,
        choices=['orbit', 'sweep', 'fixed'],
        help='Scripted pointer motion (default: orbit, or the preset\'s motion)'
    )

    parser.add_argument(
        '--gap',
        type=float,
        default=None,
        help='Distance between the last two joints (clamped to the gap range)'
    )

    parser.add_argument(
        '--width',
        type=int,
        default=None,
        help='Canvas width (default: 800)'
    )

    parser.add_argument(
        '--height',
        type=int,
        default=None,
        help='Canvas height (default: 600)'
    )

    parser.add_argument(
        '--fps',
        type=int,
        default=None,
        help='Frame rate for GIF timing and the live window (default: 60)'
    )

    parser.add_argument(
        '--config',
        type=str,
        default=None,
        metavar='PATH',
        help='YAML scene config file'
    )

    parser.add_argument(
        '--save-config',
        type=str,
        default=None,
        metavar='PATH',
        help='Write the resolved scene config to a YAML file and exit'
    )

    parser.add_argument(
        '--preset',
        type=str,
        default=None,
        metavar='NAME',
        help='Use a preset configuration (e.g., lazy_sun, tall_stem)'
    )

    parser.add_argument(
        '--list-presets',
        action='store_true',
        help='List all available presets and exit'
    )

    parser.add_argument(
        '--preset-info',
        type=str,
        default=None,
        metavar='NAME',
        help='Show detailed info about a preset and exit'
    )

    parser.add_argument(
        '--preview',
        action='store_true',
        help='Open the interactive window (requires pygame)'
    )

    parser.add_argument(
        '--audio',
        type=str,
        default=None,
        metavar='PATH',
        help='Soundtrack played when the live window starts'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Debug logging and full tracebacks'
    )

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    from sunflower.logging_config import setup_logging
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    # Preset listing/info
    if args.list_presets:
        from sunflower.core.presets import get_preset_manager
        manager = get_preset_manager()

        print("Available Scene Presets:\n")
        for name in manager.list_all():
            preset = manager.get(name)
            desc = preset.description[:50] + "..." if len(preset.description) > 50 else preset.description
            print(f"  {name:<14} - {desc}")

        print(f"\nTotal: {len(manager.list_all())} presets")
        print("\nUsage: --preset <name>")
        print("Details: --preset-info <name>")
        sys.exit(0)

    if args.preset_info:
        from sunflower.core.presets import get_preset_manager
        manager = get_preset_manager()

        preset = manager.get(args.preset_info)
        if not preset:
            print(f"Error: Preset '{args.preset_info}' not found")
            print("Use --list-presets to see available presets")
            sys.exit(1)

        print(f"Preset: {preset.name}")
        print(f"Description: {preset.description}")
        print("\nSettings:")
        for field_name in preset.SCENE_FIELDS:
            value = getattr(preset, field_name)
            if value is not None:
                print(f"  {field_name}: {value}")
        print(f"  motion: {preset.motion}")
        print(f"  frames: {preset.frames}")
        print(f"\nTags: {', '.join(preset.tags)}")
        sys.exit(0)

    # Import here to avoid slow startup for --help
    from sunflower import build_scene, animate
    from sunflower.core import get_preset, preview_scene, check_pygame_available

    try:
        scene = build_scene(
            preset=args.preset,
            config_path=args.config,
            gap=args.gap,
            width=args.width,
            height=args.height,
            fps=args.fps,
        )

        if args.save_config:
            path = scene.to_yaml(args.save_config)
            print(f"Saved config: {path}")
            return

        if args.preview:
            if not check_pygame_available():
                print("Error: Preview requires pygame. Install with: pip install pygame")
                sys.exit(1)

            print(f"Opening window ({scene.width}x{scene.height})...")
            print("Controls: SPACE/click=start, UP/DOWN=gap, R=reset, S=save frame, ESC=quit")
            preview_scene(scene, audio_path=args.audio)
            print("Preview closed.")
            return

        # Preset supplies motion/frames unless given on the command line
        motion = args.motion or 'orbit'
        frames = args.frames
        if args.preset:
            preset = get_preset(args.preset)
            motion = args.motion or preset.motion
            if frames == 120:  # Default
                frames = preset.frames

        output = args.output
        if output is None:
            output = {'gif': 'sunflower.gif', 'png': 'sunflower.png', 'frames': 'sunflower_frames'}[args.format]

        print(f"Recording {frames} frames ({motion}) at {scene.width}x{scene.height}")
        print(f"Stem: {scene.segment_count} x {scene.base_segment_length:g}, gap {scene.gap:g}")

        result = animate(
            output,
            frames=frames,
            motion=motion,
            format=args.format,
            config_path=args.config,
            preset=args.preset,
            gap=args.gap,
            width=args.width,
            height=args.height,
            fps=args.fps,
        )

        if isinstance(result, list):
            print(f"Output: {len(result)} files in {Path(output)}")
        else:
            print(f"Output: {result}")
        print("Done!")

    except Exception as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == '__main__':
    main()
