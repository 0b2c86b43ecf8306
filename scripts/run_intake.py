"""
Command-line label code intake.

Runs label photos through the batch intake pipeline, prints the resulting
list and optionally sends the reissue request email.

Usage:
    # Recognize codes in a folder of photos
    python scripts/run_intake.py photos/

    # Use the local RapidOCR engine instead of Google Cloud Vision
    python scripts/run_intake.py photos/*.jpg --engine rapidocr

    # Recognize and send the request
    python scripts/run_intake.py photos/ --send \\
        --employee-id A1234 --name "Jane Doe" --email jane@example.com
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.common.errors import IntakeError, MailDispatchError
from src.common.types import ImageRef
from src.dispatch import SMTPMailer
from src.intake import BatchIntakeCoordinator, IntakeList
from src.intake import load_config as load_intake_config
from src.ocr import create_engine
from src.ocr import get_default_config as get_ocr_config
from src.ocr import load_config as load_ocr_config
from src.submission import SubmissionService, validate_requester

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

IMAGE_SUFFIXES = {".jpg", ".jpeg", ".png", ".webp", ".bmp"}


def collect_images(paths: List[Path]) -> List[ImageRef]:
    """Load image files, expanding directories in name order."""
    files = []
    for path in paths:
        if path.is_dir():
            files.extend(
                sorted(p for p in path.iterdir() if p.suffix.lower() in IMAGE_SUFFIXES)
            )
        elif path.is_file():
            files.append(path)
        else:
            logger.warning(f"Skipping missing path: {path}")
    return [ImageRef.from_path(f) for f in files]


async def run(args: argparse.Namespace) -> int:
    ocr_config = load_ocr_config(args.ocr_config) if args.ocr_config else get_ocr_config()
    if args.engine:
        ocr_config.ocr.engine.type = args.engine

    intake_config = load_intake_config(args.config) if args.config else None
    coordinator = BatchIntakeCoordinator(
        ocr_engine=create_engine(ocr_config), config=intake_config
    )
    intake_list = IntakeList(max_items=coordinator.max_items)

    images = collect_images(args.paths)
    if not images:
        logger.error("No images found")
        return 1

    outcome = await coordinator.process_and_merge(images, intake_list)

    print("\n" + "=" * 60)
    print(outcome.summary())
    print("=" * 60)
    for index, item in enumerate(intake_list, start=1):
        print(f"{index:2}. {item.code or 'Not recognized':24} {item.image_ref.filename}")
    for error in outcome.processing_errors:
        print(f"  ! [{error.reason.code}] {error.message}")
    for image_ref in outcome.not_attempted:
        print(f"  - skipped (list full): {image_ref.filename}")

    if not args.send:
        return 0

    try:
        requester = validate_requester(args.employee_id, args.name, args.email)
        service = SubmissionService(mailer=SMTPMailer())
        result = await service.submit(requester, intake_list.snapshot())
    except MailDispatchError as e:
        logger.error(str(e))
        if e.help_text:
            print(e.help_text)
        return 1
    except IntakeError as e:
        logger.error(str(e))
        return 1

    print(f"\n✅ Request sent to {result.recipient} ({result.message_id})")
    return 0


def main():
    """Main entry point for command-line intake."""
    parser = argparse.ArgumentParser(
        description="Recognize label codes in photos and optionally send a reissue request",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/run_intake.py photos/
  python scripts/run_intake.py a.jpg b.jpg --engine rapidocr
  python scripts/run_intake.py photos/ --send --employee-id A1234 --name "Jane Doe" --email jane@example.com
        """,
    )

    parser.add_argument("paths", type=Path, nargs="+", help="Image files or directories")

    parser.add_argument(
        "--engine",
        type=str,
        choices=["vision", "rapidocr"],
        default=None,
        help="OCR engine (default: from src/ocr/config.yaml)",
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Intake config YAML (default: src/intake/config.yaml)",
    )

    parser.add_argument(
        "--ocr-config",
        type=Path,
        default=None,
        help="OCR config YAML (default: src/ocr/config.yaml)",
    )

    parser.add_argument("--send", action="store_true", help="Send the request email")
    parser.add_argument("--employee-id", type=str, default="", help="Requester employee ID")
    parser.add_argument("--name", type=str, default="", help="Requester name")
    parser.add_argument("--email", type=str, default="", help="Requester email address")

    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
