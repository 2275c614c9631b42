"""Command-line interface for parsing receipt OCR text."""

import logging
import click
import json
from pathlib import Path
from typing import List, Dict, Any, Optional
from concurrent.futures import ThreadPoolExecutor, as_completed
from tqdm import tqdm
import sys

from .config import ParserConfig
from .parse import ReceiptParser
from .review import ReviewQueue
from .export import ExcelExporter

# Set up logging; stdout is reserved for command output
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stderr)
    ]
)
logger = logging.getLogger(__name__)


class ReceiptProcessor:
    """Batch processor for OCR text files."""

    def __init__(self,
                 config: Optional[ParserConfig] = None,
                 max_workers: int = 4,
                 encoding: str = 'utf-8'):
        """
        Initialize the receipt processor.

        Args:
            config: Parser settings
            max_workers: Number of parallel workers
            encoding: Encoding of the OCR text files
        """
        self.max_workers = max_workers
        self.encoding = encoding

        self.parser = ReceiptParser(config=config)
        self.review_queue = ReviewQueue()

        self.stats = {
            'total_files': 0,
            'processed': 0,
            'failed': 0,
            'review_items': 0
        }

    def find_text_files(self, input_dir: Path) -> List[Path]:
        """Find all OCR text files in the input directory tree."""
        text_files = sorted(set(input_dir.glob('**/*.txt')))
        logger.info(f"Found {len(text_files)} OCR text files in {input_dir}")
        return text_files

    def process_single_file(self, text_path: Path) -> Dict[str, Any]:
        """
        Parse a single OCR text file.

        Raises:
            OSError, UnicodeDecodeError: If the file cannot be read
        """
        logger.debug(f"Processing {text_path.name}")
        text = text_path.read_text(encoding=self.encoding)
        parsed = self.parser.parse_receipt(text)

        return {
            'file_path': str(text_path),
            'record': parsed['record'],
            'defaulted_fields': parsed['defaulted_fields'],
            'confidence_scores': parsed['confidence_scores'],
            'raw_text': text,
        }

    def process_batch(self, input_dir: Path) -> List[Dict[str, Any]]:
        """
        Parse every text file in the input directory.

        Args:
            input_dir: Directory containing OCR text files

        Returns:
            List of results for the files that could be read, in path order
        """
        text_files = self.find_text_files(input_dir)
        self.stats['total_files'] = len(text_files)

        if not text_files:
            logger.warning("No OCR text files found!")
            return []

        results = []
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            future_to_file = {
                executor.submit(self.process_single_file, text_file): text_file
                for text_file in text_files
            }

            with tqdm(total=len(text_files), desc="Parsing receipts") as pbar:
                for future in as_completed(future_to_file):
                    text_file = future_to_file[future]
                    try:
                        results.append(future.result())
                        self.stats['processed'] += 1
                    except (OSError, UnicodeDecodeError) as e:
                        logger.error(f"Failed to read {text_file}: {e}")
                        self.stats['failed'] += 1
                        self.review_queue.add_item(
                            file_path=str(text_file),
                            reason=f"Processing failed: {e}",
                            raw_snippet=f"Error: {e}"
                        )

                    pbar.update(1)
                    pbar.set_postfix({
                        'processed': self.stats['processed'],
                        'failed': self.stats['failed']
                    })

        results.sort(key=lambda r: r['file_path'])
        for result in results:
            self.review_queue.add_from_parse(
                file_path=result['file_path'],
                record=result['record'],
                defaulted_fields=result['defaulted_fields'],
                raw_text=result['raw_text'],
                confidence_scores=result['confidence_scores']
            )
        self.stats['review_items'] = len(self.review_queue.items)

        logger.info(f"Batch processing complete. Processed: {self.stats['processed']}, "
                    f"Failed: {self.stats['failed']}, Review items: {self.stats['review_items']}")
        return results


def _load_config(config_path: Optional[Path]) -> ParserConfig:
    if config_path is None:
        return ParserConfig()
    return ParserConfig.from_yaml(config_path)


@click.group()
def cli():
    """Expense receipts - extract structured data from receipt OCR text."""
    pass


@cli.command()
@click.argument('text_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--config', 'config_path', default=None, type=click.Path(exists=True, path_type=Path),
              help='YAML file overriding parser settings')
@click.option('--encoding', default='utf-8', help='Encoding of the OCR text file')
def parse(text_file: Path, config_path: Optional[Path], encoding: str):
    """
    Parse one OCR text file and print the receipt as JSON.

    Example:
        receipts parse ./ocr/receipt_001.txt
    """
    try:
        parser = ReceiptParser(config=_load_config(config_path))
        record = parser.parse(text_file.read_text(encoding=encoding))
        click.echo(json.dumps(record.to_dict(), ensure_ascii=False, indent=2))
    except Exception as e:
        logger.error(f"Parsing failed: {e}")
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option('--in', 'input_dir', required=True, type=click.Path(exists=True, file_okay=False, path_type=Path),
              help='Input directory containing OCR text files')
@click.option('--out', 'output_dir', required=True, type=click.Path(path_type=Path),
              help='Output directory for results')
@click.option('--config', 'config_path', default=None, type=click.Path(exists=True, path_type=Path),
              help='YAML file overriding parser settings')
@click.option('--max-workers', default=4, type=int,
              help='Maximum number of parallel workers')
@click.option('--summary', is_flag=True, help='Include summary block in Excel output')
@click.option('--encoding', default='utf-8', help='Encoding of the OCR text files')
@click.option('--debug', is_flag=True, help='Enable debug output')
def run(input_dir: Path,
        output_dir: Path,
        config_path: Optional[Path],
        max_workers: int,
        summary: bool,
        encoding: str,
        debug: bool):
    """
    Parse a folder of OCR text files and generate Excel output.

    Example:
        receipts run --in ./ocr --out ./out --summary
    """
    try:
        if debug:
            logging.getLogger().setLevel(logging.DEBUG)
            click.echo("Debug mode enabled - detailed parsing logs will be shown")

        output_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"Input directory: {input_dir}")
        logger.info(f"Output directory: {output_dir}")

        processor = ReceiptProcessor(
            config=_load_config(config_path),
            max_workers=max_workers,
            encoding=encoding
        )
        results = processor.process_batch(input_dir)

        if not results:
            logger.error("No files were processed successfully!")
            return

        excel_path = output_dir / "receipts.xlsx"
        exporter = ExcelExporter(excel_path)
        exporter.export_receipts(
            entries=results,
            review_items=processor.review_queue.items,
            include_summary=summary
        )

        click.echo("\n" + "=" * 50)
        click.echo("PROCESSING SUMMARY")
        click.echo("=" * 50)
        click.echo(f"Total files found: {processor.stats['total_files']}")
        click.echo(f"Successfully processed: {processor.stats['processed']}")
        click.echo(f"Failed: {processor.stats['failed']}")
        click.echo(f"Items needing review: {processor.stats['review_items']}")
        click.echo(f"Excel: {excel_path}")

        for reason, count in sorted(processor.review_queue.get_summary().items()):
            click.echo(f"  {reason}: {count}")

    except Exception as e:
        logger.error(f"Processing failed: {e}")
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == '__main__':
    cli()
