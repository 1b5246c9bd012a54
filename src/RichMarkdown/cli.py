from __future__ import annotations

import argparse
import logging
from pathlib import Path

from . import renderer_docx
from .config import load_style_config_file
from .markdown_parser import MarkdownParser
from .model import StyledDocument
from .utils import configure_logging, read_markdown, resolve_output_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="RichMarkdown",
        description="Convert lightweight Markdown into styled rich text (DOCX).",
    )
    parser.add_argument("input", type=str, help="Path to Markdown file")
    parser.add_argument("-o", "--output", type=str, help="Output DOCX path")
    parser.add_argument("--styles", type=str, help="YAML file with style overrides")
    parser.add_argument("--runs", action="store_true", help="Print styled runs instead of writing DOCX")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def format_runs(document: StyledDocument) -> str:
    rows = []
    for line_no, line in enumerate(document.lines, start=1):
        for styled in line.runs:
            run = styled.run
            link = f" -> {run.link_url}" if run.link_url else ""
            rows.append(
                f"{line_no}\t{run.block_type.name}\t{run.inline_style.name}\t"
                f"{styled.font_name} {styled.font_size:g}pt {styled.color}\t{run.text!r}{link}"
            )
    return "\n".join(rows)


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose)
    input_path = Path(args.input).expanduser()
    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")

    logging.info("Reading %s", input_path)
    markdown_text = read_markdown(input_path)
    logging.debug("Markdown length: %d chars", len(markdown_text))

    parser = MarkdownParser(markdown_text)
    if args.styles:
        logging.info("Loading styles from %s", args.styles)
        parser.config = load_style_config_file(Path(args.styles).expanduser())

    logging.info("Parsing markdown...")
    document = parser.styled()

    if args.runs:
        print(format_runs(document))
        return

    output_path = resolve_output_path(input_path, args.output)
    logging.info("Rendering DOCX to %s", output_path)
    renderer_docx.render_document(document, output_path=output_path)
    logging.info("Done. Saved to %s", output_path)


if __name__ == "__main__":
    main()
