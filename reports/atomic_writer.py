"""
Atomic file writer - ensures no partial story or KPI files.
Implements temp-write → fsync → rename pattern for durability.
"""

import os
import json
import time
import logging
import tempfile
from pathlib import Path
from typing import Dict, Any, List, Optional

logger = logging.getLogger(__name__)


class AtomicWriteError(Exception):
    """Raised when output cannot be staged next to its destination."""
    pass


def write_files_atomic(files: Dict[Path, str]) -> Dict[str, Any]:
    """
    Write several text files so that none is touched unless all are staged.

    Every file is first written to an fsynced temp file in its target
    directory. Only when all temp files exist are they renamed into place.
    A staging failure leaves existing outputs exactly as they were.

    Args:
        files: Destination path -> text content

    Returns:
        Dictionary with write results
    """
    start_time = time.time()
    staged: List[Path] = []

    try:
        for output_path, content in files.items():
            staged.append(_stage_text(content, output_path))

        for temp_path, output_path in zip(staged, files):
            os.replace(temp_path, output_path)

    except (AtomicWriteError, OSError) as e:
        for temp_path in staged:
            _discard(temp_path)

        return {
            'status': 'failed',
            'error': str(e),
            'output_paths': [str(p) for p in files],
            'bytes_written': 0,
            'duration_seconds': time.time() - start_time
        }

    return {
        'status': 'completed',
        'output_paths': [str(p) for p in files],
        'bytes_written': sum(len(content) for content in files.values()),
        'duration_seconds': time.time() - start_time
    }


def write_story_outputs(
    story: Dict[str, Any],
    charts: Dict[str, Any],
    kpi_markdown: str,
    output_dir: Path
) -> Dict[str, Any]:
    """
    Write story JSON (views + chart payloads) and KPI Markdown.

    Both files are staged before either is replaced, so a failure keeps
    whatever a previous run left in `output_dir`.

    Args:
        story: Output of build_story()
        charts: Output of build_chart_specs()
        kpi_markdown: Output of render_kpi_cards()
        output_dir: Directory for story.json and kpis.md

    Returns:
        Dictionary with combined write results
    """
    story_path = output_dir / 'story.json'
    kpi_path = output_dir / 'kpis.md'

    try:
        # Serialize first so serialization errors never leave a temp file
        story_json = json.dumps({'story': story, 'charts': charts}, indent=2, default=str)
    except (TypeError, ValueError) as e:
        return {
            'status': 'failed',
            'error': f'JSON serialization failed: {e}',
            'story_written': False,
            'kpis_written': False
        }

    result = write_files_atomic({story_path: story_json, kpi_path: kpi_markdown})
    if result['status'] != 'completed':
        return {
            'status': 'failed',
            'error': f"Story write failed: {result.get('error', 'Unknown')}",
            'story_written': False,
            'kpis_written': False
        }

    logger.info(f"Wrote story outputs to {output_dir}")

    return {
        'status': 'completed',
        'story_path': str(story_path),
        'kpi_path': str(kpi_path),
        'story_bytes': len(story_json),
        'kpi_bytes': len(kpi_markdown),
        'story_written': True,
        'kpis_written': True
    }


def _stage_text(content: str, output_path: Path) -> Path:
    temp_path: Optional[Path] = None

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)

        # Temp file in same directory so the rename stays on one filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            suffix='.tmp',
            prefix=f'{output_path.stem}_',
            dir=output_path.parent
        )
        temp_path = Path(temp_path_str)

        with os.fdopen(temp_fd, 'w', encoding='utf-8') as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())

    except OSError as e:
        if temp_path is not None:
            _discard(temp_path)
        raise AtomicWriteError(f"Could not stage {output_path}: {e}")

    return temp_path


def _discard(temp_path: Path):
    if not temp_path.exists():
        return
    try:
        temp_path.unlink()
    except OSError:
        logger.warning(f"Could not remove temp file {temp_path}")
