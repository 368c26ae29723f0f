# roach/batch.py
#
# Batch mode: validate a file of CIDR subnets, query each one in turn and
# write subnet/origin/rpki rows.

import time
from pathlib import Path
from typing import Callable, List, Optional, Union

from roach import config
from roach.client import IRRExplorerClient, IRRExplorerError
from roach.export import extract_batch_results, filter_exact_matches, generate_csv, results_to_json
from roach.logger import BatchReporter
from roach.models import BatchResult
from roach.validation import ValidationError, format_validation_errors, validate_batch_input

PathLike = Union[str, Path]

OUTPUT_FORMATS = {
    "csv": generate_csv,
    "json": results_to_json,
}


class BatchError(RuntimeError):
    """Fatal to the whole batch run (I/O, empty input, rejected input)."""


class BatchValidationError(BatchError):
    def __init__(self, errors: List[ValidationError]):
        super().__init__(format_validation_errors(errors))
        self.errors = errors


def read_input(path: PathLike) -> str:
    try:
        content = Path(path).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise BatchError(f"Failed to read input file '{path}': {e}")
    if not content.strip():
        raise BatchError("Input file is empty")
    return content


def write_output(path: PathLike, content: str) -> None:
    try:
        Path(path).write_text(content, encoding="utf-8")
    except OSError as e:
        raise BatchError(f"Failed to write output file '{path}': {e}")


class BatchProcessor:
    def __init__(self, client: IRRExplorerClient, reporter: Optional[BatchReporter] = None,
                 delay: float = config.BATCH_DELAY, sleep: Callable[[float], None] = time.sleep,
                 progress_interval: int = config.PROGRESS_INTERVAL):
        self.client = client
        self.reporter = reporter or BatchReporter()
        self.delay = delay
        self.sleep = sleep
        self.progress_interval = progress_interval

    def process_subnet(self, subnet: str) -> List[BatchResult]:
        """Rows for one subnet; fetch failures are logged and yield no rows."""
        try:
            records = self.client.get_prefix_data(subnet)
        except IRRExplorerError as e:
            self.reporter.error(f"Failed to process subnet {subnet}: {e}")
            return []
        return extract_batch_results(filter_exact_matches(records, subnet))

    def run(self, subnets: List[str]) -> List[BatchResult]:
        total = len(subnets)
        self.reporter.info(f"Starting processing of {total} subnets...")
        results: List[BatchResult] = []
        for processed, subnet in enumerate(subnets, start=1):
            try:
                results.extend(self.process_subnet(subnet))
            except Exception as e:
                self.reporter.error(f"Unexpected error processing {subnet}: {e}")

            if processed % self.progress_interval == 0 or processed == total:
                self.reporter.progress(processed, total, f"Processing subnet: {subnet}")

            # rate limit against the shared API, nothing to wait for after the last one
            if processed < total and self.delay > 0:
                self.sleep(self.delay)

        self.reporter.processing_complete(len(results), total)
        return results

    def process_file(self, input_path: PathLike, output_path: PathLike,
                     output_format: str = "csv") -> List[BatchResult]:
        emit = OUTPUT_FORMATS.get(output_format)
        if emit is None:
            raise BatchError(f"Unsupported output format: {output_format}")

        self.reporter.info(f"Reading input file: {input_path}")
        content = read_input(input_path)

        self.reporter.info("Validating input format...")
        subnets, errors = validate_batch_input(content)
        if errors:
            self.reporter.error("Input validation failed")
            raise BatchValidationError(errors)
        self.reporter.validation_summary(len(subnets), len(errors))

        results = self.run(subnets)

        self.reporter.info(f"Writing {len(results)} results to: {output_path}")
        write_output(output_path, emit(results))
        self.reporter.info("Batch processing completed successfully!")
        self.reporter.info(f"Results saved to: {output_path}")
        return results
