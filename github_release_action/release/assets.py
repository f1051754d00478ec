"""Attaches local files to a release as assets."""

import mimetypes
from pathlib import Path

import structlog
from githubkit.exception import GitHubException

from github_release_action.github.abc import GitHubClientBase
from github_release_action.utils.actions import emit_warning
from github_release_action.utils.constants import AQUASEC_REPORT_PATH

from .exceptions import AssetAttachError
from .models import AssetOutcome, AssetResult, AttachmentReport

logger = structlog.get_logger(__name__)


def collect_asset_paths(files: list[str], with_aquasec: bool = False) -> list[str]:
    """Combine the configured file list with the optional aquasec report."""
    paths = list(files)
    if with_aquasec:
        report = Path(AQUASEC_REPORT_PATH).resolve()
        if not any(Path(path).resolve() == report for path in paths):
            paths.append(AQUASEC_REPORT_PATH)
    return paths


class AssetAttacher:
    """Uploads files to a release one at a time, in order.

    Missing files and failed uploads are recorded in the report and emitted as
    warnings; they never stop the remaining uploads.
    """

    def __init__(self, adapter: GitHubClientBase) -> None:
        self.adapter = adapter

    async def attach_all(self, release_id: int, paths: list[str], upload_url: str | None = None) -> AttachmentReport:
        report = AttachmentReport()
        for path in paths:
            result = await self.attach(release_id, path, upload_url=upload_url)
            if result.outcome != AssetOutcome.ATTACHED:
                emit_warning(result.reason or f"Asset {path} was not attached")
            report.results.append(result)
        logger.info(
            "Finished attaching assets",
            release_id=release_id,
            requested=len(paths),
            attached=len(report.attached),
            warnings=len(report.warnings),
        )
        return report

    async def attach(self, release_id: int, path: str, upload_url: str | None = None) -> AssetResult:
        file_path = Path(path)
        name = file_path.name
        if not file_path.is_file():
            reason = f"File not found: {path}"
            logger.warning("Asset file not found, skipping", path=path, release_id=release_id)
            return AssetResult(path=path, name=name, outcome=AssetOutcome.SKIPPED, reason=reason)

        try:
            await self._upload(release_id, file_path, upload_url)
        except AssetAttachError as exc:
            logger.warning("Failed to attach asset", path=path, release_id=release_id, error=exc.reason)
            return AssetResult(path=path, name=name, outcome=AssetOutcome.FAILED, reason=str(exc))

        return AssetResult(path=path, name=name, outcome=AssetOutcome.ATTACHED)

    async def _upload(self, release_id: int, file_path: Path, upload_url: str | None) -> None:
        content_type = mimetypes.guess_type(file_path.name)[0] or "application/octet-stream"
        try:
            data = file_path.read_bytes()
            await self.adapter.upload_release_asset(
                release_id=release_id,
                name=file_path.name,
                data=data,
                content_type=content_type,
                upload_url=upload_url,
            )
        except (OSError, GitHubException, ValueError) as exc:
            raise AssetAttachError(path=str(file_path), reason=str(exc)) from exc
