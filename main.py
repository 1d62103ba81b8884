#!/usr/bin/env python3
"""
Invoice Parsing Engine - Main Entry Point.

Parses vendor invoice documents (text, PDF, scanned images) into
structured invoices with line items, and writes the results as JSON
or Excel.

Usage:
    Command Line:
        python main.py --input invoice.pdf --output results.json
        python main.py --input ./invoices/ --output results.xlsx --strict

    Python:
        from main import run_parsing
        results = run_parsing("invoice.pdf")

Author: ML Engineering Team
Version: 1.0.0
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import ConfigurationManager
from invoice_parser.utils.logger import setup_logger_from_config, get_logger
from invoice_parser.utils.exceptions import InvoiceParsingError
from invoice_parser.utils.helpers import generate_timestamp

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_VALIDATION_FAILED = 2
EXIT_INTERRUPTED = 130


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: Argument list; defaults to sys.argv.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="Invoice Parsing Engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    Parse a single invoice:
        python main.py --input invoice.pdf --output results.json

    Parse a directory into a workbook:
        python main.py --input ./invoices/ --output results.xlsx

    Fail when any invoice needs review:
        python main.py --input ./invoices/ --strict
        """
    )

    parser.add_argument(
        "--input", "-i",
        type=str,
        required=True,
        help="Input file or directory containing invoices"
    )

    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Output file, .json or .xlsx (default: <output_dir>/parse_results_<timestamp>.json)"
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to custom configuration file"
    )

    parser.add_argument(
        "--recursive", "-r",
        action="store_true",
        help="Search input directory recursively"
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with code 2 when result validation reports errors"
    )

    # Logging options
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log warnings and errors"
    )

    return parser.parse_args(argv)


def initialize_system(args: argparse.Namespace) -> ConfigurationManager:
    """
    Initialize configuration and logging.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Initialized configuration manager.
    """
    config = ConfigurationManager(args.config)

    if args.output is None:
        output_dir = Path(config.get("paths.output_dir", "outputs"))
        args.output = str(output_dir / f"parse_results_{generate_timestamp()}.json")

    logger = setup_logger_from_config()

    if args.debug or args.quiet:
        level = logging.DEBUG if args.debug else logging.WARNING
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)

    logger.info("=" * 60)
    logger.info("INVOICE PARSING ENGINE")
    logger.info("=" * 60)
    logger.info(f"Version: {config.get('project.version', '1.0.0')}")
    logger.info(f"Input: {args.input}")
    logger.info(f"Output: {args.output}")

    return config


def collect_inputs(input_path: str, recursive: bool = False) -> List[Path]:
    """
    Resolve the input argument to the list of files to parse.

    Args:
        input_path: File or directory path.
        recursive: Whether to search subdirectories.

    Returns:
        List of supported input files.

    Raises:
        FileNotFoundError: If the input path doesn't exist.
        UnsupportedFileTypeError: If a single input file has an unsupported type.
    """
    from invoice_parser.input_handler import TextExtractor

    extractor = TextExtractor()
    path = Path(input_path)

    if path.is_dir():
        return extractor.collect_files(path, recursive=recursive)

    path = extractor.validate_file(path)
    extractor.detect_file_type(path)
    return [path]


def run_parsing(
    input_path: str,
    output_path: Optional[str] = None,
    config_path: Optional[str] = None,
    recursive: bool = False
):
    """
    Run the invoice parsing pipeline.

    This is the main programmatic entry point. Each file is parsed
    independently; a file that fails yields a ``success: false``
    result without stopping the batch.

    Args:
        input_path: Path to input file or directory.
        output_path: Optional .json or .xlsx destination.
        config_path: Optional custom configuration file path.
        recursive: Whether to search subdirectories.

    Returns:
        Dictionary mapping file path (relative to the input directory)
        to ParseResult.

    Example:
        >>> results = run_parsing("invoices/")
        >>> for name, result in results.items():
        ...     print(name, result.total_invoices)
    """
    logger = get_logger(__name__)

    ConfigurationManager(config_path)

    from invoice_parser.parsing import InvoiceParser
    from invoice_parser.output_handler import OutputHandler

    files = collect_inputs(input_path, recursive=recursive)
    root = Path(input_path) if Path(input_path).is_dir() else Path(input_path).parent
    logger.info(f"Processing {len(files)} files...")

    parser = InvoiceParser()
    results = {}

    for file_path in files:
        name = file_path.relative_to(root).as_posix()
        logger.info(f"Processing: {name}")
        result = parser.parse_file(file_path)
        results[name] = result

        if result.success:
            logger.info(
                f"  {name}: {result.total_invoices} invoice(s), "
                f"{sum(len(inv.items) for inv in result.invoices)} item(s)"
            )
        else:
            logger.error(f"  {name}: {result.error}")

    if output_path and results:
        OutputHandler().save(results, output_path)

    return results


def report_validation(results: Dict) -> int:
    """
    Validate every result and log the problems found.

    Returns:
        Total number of validation errors.
    """
    from invoice_parser.postprocessor import ResultValidator

    logger = get_logger(__name__)
    validator = ResultValidator()
    error_count = 0

    for name, result in results.items():
        report = validator.validate(result)
        for error in report.errors:
            logger.warning(f"{name}: {error}")
        error_count += len(report.errors)

    return error_count


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function - entry point for command-line execution.

    Returns:
        Exit code: 0 success, 1 error, 2 validation failure in
        strict mode, 130 interrupted.
    """
    args = None
    try:
        args = parse_arguments(argv)

        initialize_system(args)
        logger = get_logger(__name__)

        results = run_parsing(
            input_path=args.input,
            output_path=args.output,
            config_path=args.config,
            recursive=args.recursive
        )

        if not results:
            logger.error("No files to process")
            return EXIT_ERROR

        error_count = report_validation(results)
        total_invoices = sum(result.total_invoices for result in results.values())

        logger.info("=" * 60)
        logger.info(
            f"Parsing complete. {len(results)} files, {total_invoices} invoices, "
            f"{error_count} validation issues."
        )
        logger.info("=" * 60)

        if args.strict and error_count:
            return EXIT_VALIDATION_FAILED
        return EXIT_OK

    except InvoiceParsingError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        return EXIT_INTERRUPTED

    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        if args is not None and args.debug:
            import traceback
            traceback.print_exc()
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
