"""Analysis pipeline: decode, match, classify, summarize."""

import base64
import logging
import mimetypes
import time
from collections.abc import Callable, Generator, Iterable
from dataclasses import dataclass
from pathlib import Path

from sigsentry.errors import EmptyContentError, MissingInputError
from sigsentry.scanner.decoder import decode_content
from sigsentry.scanner.matcher import find_malicious_patterns
from sigsentry.scanner.results import AnalysisResult
from sigsentry.signatures.library import DEFAULT_LIBRARY, SignatureLibrary
from sigsentry.summary.policy import SummaryPolicy
from sigsentry.summary.summarizers import Summarizer

logger = logging.getLogger(__name__)

MISSING_INPUT_MESSAGE = "Missing required input data."
EMPTY_CONTENT_SUMMARY = "Analysis could not be performed: File content is empty."
UNEXPECTED_ERROR_MESSAGE = (
    "An unexpected error occurred on the server during analysis. "
    "Please check server logs for details."
)


@dataclass
class Upload:
    """One submitted file as received from the upload layer."""

    file_name: str
    file_content: str  # data URI or bare base64
    content_type: str


def analyze_file_content(
    file_name: str,
    file_content: str,
    content_type: str,
    library: SignatureLibrary | None = None,
    summarizer: Summarizer | None = None,
) -> AnalysisResult:
    """Analyze a single uploaded file.

    Only missing or empty input is reported as an error. Decode failures
    fall back to scanning the raw payload and summarizer failures get a
    synthesized summary. Any other exception is logged and reported with
    a generic message.

    Args:
        file_name: Name of the uploaded file
        file_content: Data URI or bare base64 payload
        content_type: MIME type reported by the upload layer
        library: Signature library (default: built-in library)
        summarizer: Summarizer collaborator (default: TemplateSummarizer)

    Returns:
        AnalysisResult for the file
    """
    start_time = time.perf_counter()
    library = DEFAULT_LIBRARY if library is None else library

    logger.info(
        "Starting analysis for file: %s, type: %s, size approx: %d chars",
        file_name,
        content_type,
        len(file_content or ""),
    )

    try:
        _check_input(file_name, file_content, content_type)
        outcome = decode_content(file_content)

        findings = find_malicious_patterns(outcome.text, library)
        logger.debug(
            "Pattern matching complete. Found %d potential patterns. "
            "Decoded successfully: %s. Decode error: %s",
            len(findings),
            outcome.decoded_successfully,
            outcome.decode_error or "None",
        )

        summary = SummaryPolicy(summarizer).summarize(findings, outcome)
        result = AnalysisResult(
            file_name=file_name,
            findings=findings,
            summary=summary,
            decoded_successfully=outcome.decoded_successfully,
            decode_error=outcome.decode_error,
        )
    except MissingInputError as e:
        logger.error("Analysis failed for %r: %s", file_name, e)
        result = AnalysisResult(file_name=file_name or "", error=str(e))
    except EmptyContentError as e:
        result = AnalysisResult(file_name=file_name, error=str(e), summary=EMPTY_CONTENT_SUMMARY)
    except Exception:
        logger.exception("Unexpected error during analysis of %r", file_name)
        result = AnalysisResult(file_name=file_name or "", error=UNEXPECTED_ERROR_MESSAGE)

    result.scan_time_ms = (time.perf_counter() - start_time) * 1000
    logger.info(
        "Analysis finished for %s: %d findings", result.file_name, len(result.findings)
    )
    return result


def analyze_files(
    uploads: Iterable[Upload],
    library: SignatureLibrary | None = None,
    summarizer: Summarizer | None = None,
    progress_callback: Callable[[str, int, int], None] | None = None,
) -> Generator[AnalysisResult, None, None]:
    """Analyze uploads one at a time in submission order.

    Args:
        uploads: Uploaded files
        library: Signature library shared by every file
        summarizer: Summarizer collaborator
        progress_callback: Optional callback(file_name, current, total)

    Yields:
        AnalysisResult for each upload
    """
    items = list(uploads)
    total = len(items)
    for i, upload in enumerate(items):
        if progress_callback:
            progress_callback(upload.file_name, i + 1, total)
        yield analyze_file_content(
            upload.file_name,
            upload.file_content,
            upload.content_type,
            library=library,
            summarizer=summarizer,
        )


def read_upload(filepath: Path, encoded: bool = False) -> Upload:
    """Build an upload from a local file.

    Args:
        filepath: File to read
        encoded: Treat the file as already holding a data URI / base64 text

    Returns:
        Upload wrapping the file's content as a data URI
    """
    filepath = Path(filepath)
    content_type = mimetypes.guess_type(filepath.name)[0] or "application/octet-stream"

    if encoded:
        content = filepath.read_text(encoding="latin-1").strip()
    else:
        payload = base64.b64encode(filepath.read_bytes()).decode("ascii")
        content = f"data:{content_type};base64,{payload}"

    return Upload(file_name=filepath.name, file_content=content, content_type=content_type)


def analyze_path(
    filepath: Path,
    encoded: bool = False,
    library: SignatureLibrary | None = None,
    summarizer: Summarizer | None = None,
) -> AnalysisResult:
    """Analyze a local file as if it had been uploaded."""
    filepath = Path(filepath)
    try:
        upload = read_upload(filepath, encoded=encoded)
    except OSError as e:
        logger.error("Cannot read %s: %s", filepath, e)
        return AnalysisResult(file_name=filepath.name, error=f"Cannot read file: {e}")

    return analyze_file_content(
        upload.file_name,
        upload.file_content,
        upload.content_type,
        library=library,
        summarizer=summarizer,
    )


def collect_files(paths: Iterable[Path], recursive: bool = True) -> list[Path]:
    """Expand files and directories into a list of files, keeping argument order.

    Args:
        paths: Files or directories
        recursive: Whether to descend into subdirectories

    Returns:
        List of file paths
    """
    files: list[Path] = []
    for path in paths:
        path = Path(path)
        if path.is_dir():
            pattern = "**/*" if recursive else "*"
            files.extend(sorted(p for p in path.glob(pattern) if p.is_file()))
        elif path.is_file():
            files.append(path)
    return files


def _check_input(file_name: str, file_content: str, content_type: str) -> None:
    if not file_name or not file_content or not content_type:
        raise MissingInputError(MISSING_INPUT_MESSAGE)
