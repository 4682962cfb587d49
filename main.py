#!/usr/bin/env python3
"""
Rider Agent - CLI Entry Point

A LangGraph-based agent that turns tour and event riders (plain text from
OCR or PDF extraction) into structured records and checklists.

Usage:
    # Single rider
    python main.py ./riders/headliner.txt ./output

    # Batch folder
    python main.py ./riders/ ./output

    # Deterministic parsing only
    python main.py ./riders/ ./output --no-llm

    # Show workflow visualization
    python main.py --show-graph
"""

import argparse
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path
from datetime import datetime
from typing import List, Optional, Tuple

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from version import __version__, APP_NAME
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


def find_input_files(input_path: Path) -> List[Path]:
    """Return the .txt file itself, or every .txt file in a folder (sorted)."""
    if input_path.is_file():
        return [input_path]
    return sorted(p for p in input_path.glob("*.txt") if p.is_file())


def process_file(
    file_path: Path,
    output_path: Path,
    provider=None,
    parsing_config=None
) -> Tuple[str, str, int]:
    """
    Parse one rider file and write its reports.

    Returns:
        (json_path, csv_path, item_count)
    """
    from rider_agent import parse_rider
    from rider_tools.report import write_json_report, write_csv_checklist

    text = file_path.read_text(encoding="utf-8", errors="replace")
    rider = parse_rider(text, provider=provider, parsing_config=parsing_config)

    json_path = write_json_report(rider, output_path, file_path.stem)
    csv_path = write_csv_checklist(rider, output_path, file_path.stem)
    return json_path, csv_path, len(rider.items)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    from rider_tools.llm_providers import get_available_providers

    parser = argparse.ArgumentParser(
        description=f"{APP_NAME} - Extract structured checklists from tour riders",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s ./riders/headliner.txt ./output
  %(prog)s ./riders/ ./output --config ./config/rider_config.yaml
  %(prog)s ./riders/ ./output --provider openai
  %(prog)s ./riders/ ./output --no-llm
  %(prog)s --show-graph
        """
    )

    parser.add_argument(
        "input_path",
        nargs="?",
        help="Rider .txt file or folder containing .txt riders"
    )

    parser.add_argument(
        "output_path",
        nargs="?",
        help="Directory for output reports"
    )

    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to YAML config (default: ./config/rider_config.yaml if present)"
    )

    parser.add_argument(
        "--no-llm",
        action="store_true",
        help="Skip the external LLM provider and use deterministic parsing only"
    )

    parser.add_argument(
        "--provider",
        choices=get_available_providers(),
        default=None,
        help="LLM provider to try first (default: from config or RIDER_LLM_PROVIDER)"
    )

    parser.add_argument(
        "--show-graph",
        action="store_true",
        help="Show workflow graph visualization and exit"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose/debug logging"
    )

    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    args = parser.parse_args(argv)

    # Set logging level
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    # Show graph visualization
    if args.show_graph:
        from rider_agent import get_workflow_visualization
        print(get_workflow_visualization())
        return 0

    # Validate required arguments
    if not args.input_path or not args.output_path:
        parser.error("input_path and output_path are required (unless using --show-graph)")

    # Resolve paths
    input_path = Path(args.input_path).resolve()
    output_path = Path(args.output_path).resolve()

    # Validate input
    if not input_path.exists():
        logger.error(f"Input path does not exist: {input_path}")
        return 1

    files = find_input_files(input_path)
    if not files:
        logger.error(f"No .txt riders found in: {input_path}")
        return 1

    try:
        from rider_tools.config import load_config, apply_env_overrides, API_KEY_ENV_VARS
        from rider_tools.llm_providers import provider_from_config

        config = load_config(args.config)

        provider = None
        llm = apply_env_overrides(config.llm)
        if args.provider and args.provider != llm.provider:
            llm = replace(
                llm,
                provider=args.provider,
                model="",
                api_key=os.getenv(API_KEY_ENV_VARS[args.provider], ""),
            )
        if not args.no_llm:
            provider = provider_from_config(llm)

    except (FileNotFoundError, TypeError, ValueError, ImportError) as e:
        logger.error(f"Configuration error: {e}")
        return 1

    output_path.mkdir(parents=True, exist_ok=True)

    mode_display = f"LLM ({provider.PROVIDER_NAME}) with deterministic fallback" if provider else "Deterministic"

    # Print banner
    print("\n" + "=" * 60)
    print(f"  {APP_NAME} {__version__}")
    print("  LangGraph Workflow for Tour Rider Extraction")
    print("=" * 60)
    print(f"  Input:    {input_path}")
    print(f"  Output:   {output_path}")
    print(f"  Files:    {len(files)}")
    print(f"  Mode:     {mode_display}")
    print("=" * 60 + "\n")

    start_time = datetime.now()
    completed = []
    failed = []

    for file_path in files:
        try:
            _, _, item_count = process_file(file_path, output_path, provider, config.parsing)
            completed.append((file_path.name, item_count))
        except (OSError, UnicodeError) as e:
            logger.error(f"Failed to process {file_path.name}: {e}")
            failed.append((file_path.name, str(e)))

    duration = (datetime.now() - start_time).total_seconds()

    # Print summary
    print("\n" + "=" * 60)
    print("  PROCESSING COMPLETE")
    print("=" * 60)
    print(f"  Files Processed: {len(completed) + len(failed)}")
    print(f"  Successful:      {len(completed)}")
    print(f"  Failed:          {len(failed)}")
    print(f"  Total Items:     {sum(count for _, count in completed)}")
    print(f"  Duration:        {duration:.1f} seconds")
    print("=" * 60)
    print(f"\n  Reports saved to: {output_path}")

    if failed:
        print("\n  Failed files:")
        for name, error in failed:
            print(f"    - {name}: {error}")

    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
