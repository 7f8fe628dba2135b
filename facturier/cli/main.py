"""CLI interface: generate PDFs, spell out amounts, export registers."""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

# Fix encoding for Windows console
if sys.platform == "win32":
    try:
        sys.stdout.reconfigure(encoding='utf-8')
    except (AttributeError, ValueError):
        pass

from ..config import (
    get_app_name,
    get_app_version,
    get_default_currency,
    get_default_output_dir,
    get_layout_profile_name,
    get_log_level,
)
from ..config.profile_manager import set_profile
from ..export.excel_export import export_register_to_excel
from ..export.pdf_export import PDFExportError, render_document_to_pdf
from ..models.currency import CURRENCIES, get_currency_policy
from ..pipeline.amount_in_words import amount_to_words
from ..pipeline.assembler import MissingRelationError, assemble_document
from ..pipeline.number_normalizer import normalize_number
from ..pipeline.numbering import next_invoice_number, select_default_company
from ..pipeline.record_normalizer import (
    load_company_records,
    load_invoice_records,
    normalize_invoice_record,
    normalize_invoices,
)
from ..pipeline.register import summarize_invoices

logger = logging.getLogger(__name__)


def generate_documents(
    input_path: str,
    output_dir: str,
    number: Optional[str] = None,
    verbose: bool = False,
    companies_path: Optional[str] = None,
) -> dict:
    """Generate one PDF per invoice record in ``input_path``.

    Args:
        input_path: JSON file with one invoice record or a list of them
        output_dir: Directory for the PDFs
        number: Only generate the document with this number
        verbose: Print one line per document
        companies_path: JSON file with the stored companies; the default one
            issues the records that carry no company snapshot

    Returns:
        Dict with "generated" (list of paths) and "errors" (list of dicts with
        "number" and "error")
    """
    records = load_invoice_records(input_path)
    if number is not None:
        records = [record for record in records if record.number == number]
        if not records:
            raise ValueError(f"No document numbered {number!r} in {input_path}")

    company_fallback = None
    if companies_path:
        company_fallback = select_default_company(load_company_records(companies_path))
        if company_fallback is not None:
            logger.info("Default company: %s", company_fallback.name)

    results = {"generated": [], "errors": []}
    for record in records:
        label = record.number or record.id
        try:
            invoice = normalize_invoice_record(record, company_fallback=company_fallback)
            document = assemble_document(invoice)
            path = render_document_to_pdf(document, output_dir)
        except (MissingRelationError, PDFExportError) as e:
            logger.error("Document %s not generated: %s", label, e)
            results["errors"].append({"number": record.number, "error": str(e)})
            continue
        except Exception as e:
            # One bad record must not stop the rest of the batch
            logger.exception("Document %s not generated", label)
            results["errors"].append({"number": record.number, "error": f"Processing error: {e}"})
            continue
        results["generated"].append(path)
        if verbose:
            print(f"  {record.number}: {path} ({document.amount_in_words})")
    return results


def _handle_generate(args: argparse.Namespace) -> int:
    output_dir = args.output or str(get_default_output_dir())
    results = generate_documents(
        args.input, output_dir, number=args.number, verbose=args.verbose, companies_path=args.companies
    )

    print(f"Done: {len(results['generated'])} generated, {len(results['errors'])} failed.")
    for error in results["errors"]:
        print(f"  {error['number']}: {error['error']}", file=sys.stderr)
    return 1 if results["errors"] else 0


def _handle_words(args: argparse.Namespace) -> int:
    currency = get_currency_policy(args.currency) if args.currency else get_default_currency()
    print(amount_to_words(normalize_number(args.amount), currency))
    return 0


def _handle_register(args: argparse.Namespace) -> int:
    invoices = normalize_invoices(load_invoice_records(args.input))
    output = args.output or str(get_default_output_dir() / "registre_factures.xlsx")
    path = export_register_to_excel(invoices, output)
    print(f"Excel: {path}")
    return 0


def _handle_next_number(args: argparse.Namespace) -> int:
    records = load_invoice_records(args.input) if args.input else []
    print(next_invoice_number((record.number for record in records), args.year or date.today().year))
    return 0


def _handle_summary(args: argparse.Namespace) -> int:
    summary = summarize_invoices(normalize_invoices(load_invoice_records(args.input)))
    print(f"Factures: {summary.invoice_count}")
    print(f"Devis: {summary.quote_count}")
    print(f"Clients: {summary.client_count}")
    for code, amount in sorted(summary.revenue.items()):
        print(f"Chiffre d'affaires {code}: {amount:f} {CURRENCIES[code].symbol}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="facturier",
        description=f"{get_app_name()} - French invoices and quotes (TND/EUR) to PDF"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_app_version()}")
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output (INFO logging)"
    )
    parser.add_argument(
        "--profile",
        required=False,
        help="Layout profile name from configs/profiles (default: FACTURIER_LAYOUT_PROFILE or 'default')"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Generate PDF documents from invoice records")
    generate.add_argument("--input", required=True, help="JSON file with one invoice record or a list")
    generate.add_argument("--output", required=False, help="Output directory (default: ./out)")
    generate.add_argument("--number", required=False, help="Only generate the document with this number")
    generate.add_argument(
        "--companies",
        required=False,
        help="JSON file with the stored companies; the default one is used for records without a company"
    )
    generate.set_defaults(handler=_handle_generate)

    words = subparsers.add_parser("words", help="Spell out an amount in French")
    words.add_argument("amount", help="Amount, '.' or ',' as decimal separator")
    words.add_argument(
        "--currency",
        choices=sorted(CURRENCIES),
        required=False,
        help="Currency (default: FACTURIER_DEFAULT_CURRENCY or TND)"
    )
    words.set_defaults(handler=_handle_words)

    register = subparsers.add_parser("register", help="Export the invoice register to Excel")
    register.add_argument("--input", required=True, help="JSON file with invoice records")
    register.add_argument("--output", required=False, help="Output .xlsx path")
    register.set_defaults(handler=_handle_register)

    next_number = subparsers.add_parser("next-number", help="Print the next document number")
    next_number.add_argument("--input", required=False, help="JSON file with existing invoice records")
    next_number.add_argument("--year", type=int, required=False, help="Year of the sequence (default: current)")
    next_number.set_defaults(handler=_handle_next_number)

    summary = subparsers.add_parser("summary", help="Print document counts and revenue per currency")
    summary.add_argument("--input", required=True, help="JSON file with invoice records")
    summary.set_defaults(handler=_handle_summary)

    return parser


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.INFO if args.verbose else get_log_level()
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        profile_name = args.profile or get_layout_profile_name()
        # "default" resolves lazily and falls back to the built-in layout
        if profile_name != "default":
            set_profile(profile_name)
        exit_code = args.handler(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
