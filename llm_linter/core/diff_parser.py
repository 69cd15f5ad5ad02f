"""
Unified diff parsing.

Turns raw unified diff text into ChangeUnits, one per hunk, whose lines are
prefixed with post-change line numbers so the model can point at them.
"""

from typing import List

from unidiff import PatchSet, PatchedFile
from unidiff.constants import LINE_TYPE_ADDED, LINE_TYPE_NO_NEWLINE, LINE_TYPE_REMOVED
from unidiff.errors import UnidiffParseError

from llm_linter.exceptions import ParseError
from llm_linter.models.change_unit import ChangeUnit
from llm_linter.utils.logging import get_logger

logger = get_logger(__name__)

DEV_NULL = "/dev/null"


def _strip_prefix(path: str, prefix: str) -> str:
    return path[len(prefix):] if path.startswith(prefix) else path


def _unit_path(patched_file: PatchedFile) -> str:
    """Repository-relative post-change path; deleted files fall back to the source path."""
    target = patched_file.target_file
    if target == DEV_NULL:
        return _strip_prefix(patched_file.source_file, "a/")
    return _strip_prefix(target, "b/")


def _render_line(line) -> str:
    text = line.value.rstrip("\r\n")
    if line.line_type == LINE_TYPE_ADDED:
        return f"+{text}"
    if line.line_type == LINE_TYPE_REMOVED:
        return f"-{text}"
    return text


def parse_diff(text: str) -> List[ChangeUnit]:
    """
    Parse unified diff text into change units.
    
    Every line of a hunk, removals included, takes the next number after the
    hunk's post-change start, so the prefix is a position in the rendered
    hunk rather than a true pre-change line number.
    
    Args:
        text: Unified diff covering one or more files
        
    Returns:
        One ChangeUnit per hunk, in file then hunk order
        
    Raises:
        ParseError: If the text is not a structurally valid unified diff
    """
    if not text.strip():
        logger.info("Empty diff, nothing to parse")
        return []
    
    # Paths and line values never carry a trailing "\r"
    try:
        patch_set = PatchSet(text.replace("\r\n", "\n"))
    except UnidiffParseError as e:
        raise ParseError(f"Failed to parse diff: {e}") from e
    
    if len(patch_set) == 0:
        raise ParseError("Failed to parse diff: no file headers found")
    
    units: List[ChangeUnit] = []
    for patched_file in patch_set:
        path = _unit_path(patched_file)
        
        for hunk in patched_file:
            rendered = [
                _render_line(line)
                for line in hunk
                if line.line_type != LINE_TYPE_NO_NEWLINE
            ]
            lines = tuple(
                f"{hunk.target_start + i:4} {line}"
                for i, line in enumerate(rendered)
            )
            units.append(
                ChangeUnit(
                    path=path,
                    lines=lines,
                    start_line=hunk.target_start,
                    end_line=hunk.target_start + hunk.target_length,
                )
            )
    
    logger.info(f"Parsed {len(units)} change units from {len(patch_set)} files")
    return units
