"""
Command Line Interface for Scene Text Recognition
"""

import argparse
import logging
import sys
from pathlib import Path

from .config import DetectorConfig
from .errors import SceneTextError
from .modules.text import create_recognizer
from .pipeline import SceneTextPipeline
from .preview import save_preview


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scene-text",
        description="Read text from photos and scanned images",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Classifier XML files in the current directory
  scene-text photo.jpg

  # Classifiers stored elsewhere, repeated words collapsed
  scene-text photo.jpg --classifier-dir ~/models/er --unique-words

  # Save the detected rectangles for inspection
  scene-text photo.jpg --preview boxes.png -v
        """
    )

    parser.add_argument(
        'inputs',
        nargs='+',
        help='Input image file path(s)'
    )

    # Classifiers
    parser.add_argument(
        '--classifier-dir',
        default=None,
        help='Directory holding the three ER classifier files '
             '(default: $SCENE_TEXT_CLASSIFIER_DIR or the working directory)'
    )
    parser.add_argument('--nm1', default=None, help='Stage 1 ER classifier file')
    parser.add_argument('--nm2', default=None, help='Stage 2 ER classifier file')
    parser.add_argument('--grouping', default=None, help='erGrouping classifier file')
    parser.add_argument(
        '--parallel',
        action='store_true',
        help='Run channel detection on a thread pool'
    )

    # Recognition
    parser.add_argument(
        '--backend',
        default='tesseract',
        choices=['tesseract', 'onnx'],
        help='OCR backend (default: tesseract)'
    )
    parser.add_argument(
        '--lang',
        default=None,
        help='Tesseract language (default: eng); not accepted with --backend onnx'
    )
    parser.add_argument(
        '--unique-words',
        action='store_true',
        help='Keep only the first occurrence of every word'
    )

    # Output
    parser.add_argument(
        '--preview',
        default=None,
        help='Save an annotated image of the detected rectangles '
             '(with several inputs, the input stem is appended)'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )
    return parser


def build_detector_config(args: argparse.Namespace) -> DetectorConfig:
    if args.classifier_dir:
        config = DetectorConfig.from_directory(args.classifier_dir, parallel=args.parallel)
    else:
        config = DetectorConfig.from_env(parallel=args.parallel)

    return config.with_classifiers(
        args.nm1 or config.classifier_nm1,
        args.nm2 or config.classifier_nm2,
        args.grouping or config.classifier_grouping,
    )


def _preview_path(preview: str, input_path: Path, many: bool) -> Path:
    path = Path(preview)
    if not many:
        return path
    return path.with_name(f"{path.stem}_{input_path.stem}{path.suffix}")


def main(argv=None):
    """Main CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.backend == 'onnx' and args.lang is not None:
        parser.error("--lang only applies to the tesseract backend")

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.backend == 'tesseract':
        recognizer = create_recognizer('tesseract', language=args.lang or 'eng')
    else:
        recognizer = create_recognizer('onnx')

    many = len(args.inputs) > 1
    try:
        pipeline = SceneTextPipeline(
            detector_config=build_detector_config(args),
            recognizer=recognizer,
            unique_words=args.unique_words,
        )

        for name in args.inputs:
            input_path = Path(name)
            image = pipeline.load_image(name)
            result = pipeline.read(image)

            if many:
                print(f"{input_path.name}: {result.text}")
            else:
                print(result.text)

            if args.verbose:
                failed = sum(1 for region in result.regions if not region.ok)
                print(
                    f"  rectangles: {result.raw_rect_count} -> {len(result.rects)}, "
                    f"regions: {len(result.regions)} ({failed} failed), "
                    f"whole image: {result.whole_image}",
                    file=sys.stderr,
                )

            if args.preview:
                save_preview(result, image, str(_preview_path(args.preview, input_path, many)))

        return 0

    except KeyboardInterrupt:
        print("\n\nInterrupted by user", file=sys.stderr)
        return 130
    except SceneTextError as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose and e.cause is not None:
            print(f"  caused by: {e.cause!r}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
