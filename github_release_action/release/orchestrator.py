"""Orchestrates a release run: tag, changelog, release, assets and notification."""

from typing import Self

import structlog
from structlog.stdlib import BoundLogger

from github_release_action.configuration.models import ReleaseConfig
from github_release_action.github.abc import GitHubClientBase
from github_release_action.github.adapter import GitHubKitAdapter

from .assets import AssetAttacher, collect_asset_paths
from .changelog import ChangelogBuilder
from .models import NotificationContext, ReleaseResult, ReleaseStatus
from .notifier import WebhookNotifier
from .publisher import ReleasePublisher
from .tags import TagResolver, select_changelog_bounds

logger: BoundLogger = structlog.get_logger(__name__)  # type: ignore


class ReleaseOrchestrator:
    """Turns a requested version into a published release plus optional notification.

    Steps run strictly in sequence. An error in any step ends the run; nothing
    done by earlier steps is rolled back, so a release created before a later
    failure stays published. ``result`` reflects the progress made so far.
    """

    def __init__(self, config: ReleaseConfig, adapter: GitHubClientBase, notifier: WebhookNotifier | None = None) -> None:
        self.config = config
        self.adapter = adapter
        self.tag_resolver = TagResolver(adapter)
        self.changelog_builder = ChangelogBuilder(adapter)
        self.publisher = ReleasePublisher(adapter, name_template=config.release_name_template)
        self.attacher = AssetAttacher(adapter)
        if notifier is None and config.webhook_url:
            notifier = WebhookNotifier(config.webhook_url, provider=config.notification_provider)
        self.notifier = notifier
        self.result = ReleaseResult(status=ReleaseStatus.SUCCESS, version=config.version)

    @classmethod
    async def create(cls, config: ReleaseConfig) -> Self:
        """Create an orchestrator backed by an authenticated githubkit adapter."""
        adapter = await GitHubKitAdapter.create(
            repo=config.repo,
            github_token=config.github_token,
            github_api_url=config.github_api_url,
            rate_limit_retries=config.rate_limit_retries,
        )
        return cls(config, adapter)

    async def run(self) -> ReleaseResult:
        config = self.config
        log = logger.bind(repo=config.repo, version=config.version)

        # Tags listed before the new tag is created; the new tag never bounds the changelog.
        tags = await self.tag_resolver.list_tags()
        dated_tags = await self.tag_resolver.list_dated_tags(tags)
        self.result.tag_created = await self.tag_resolver.ensure_tag(config.version, config.sha, tags)

        bounds = select_changelog_bounds(dated_tags)
        changelog = await self.changelog_builder.build(bounds)
        self.result.changelog = changelog.render()
        self.result.changelog_source = changelog.source
        log.info("Built changelog", source=changelog.source.value, entries=len(changelog.entries))
        log.debug("Changelog", changelog=self.result.changelog)

        release = await self.publisher.publish(config.version, config.name, self.result.changelog)
        self.result.release_id = release.id
        self.result.release_url = release.html_url

        paths = collect_asset_paths(config.files, with_aquasec=config.with_aquasec)
        if paths:
            self.result.assets = await self.attacher.attach_all(release.id, paths, upload_url=release.upload_url)

        if self.notifier is not None:
            await self.notifier.notify(
                NotificationContext(
                    name=config.name,
                    version=config.version,
                    changelog=self.result.changelog,
                    release_url=self.result.release_url,
                )
            )
            self.result.notified = True
        else:
            log.debug("No webhook configured, skipping notification")

        log.info("Release run completed", release_id=self.result.release_id, tag_created=self.result.tag_created)
        return self.result


async def run_release_workflow(config: ReleaseConfig, orchestrator: ReleaseOrchestrator | None = None) -> ReleaseResult:
    """Run a release and report any failure in the returned result instead of raising."""
    try:
        if orchestrator is None:
            orchestrator = await ReleaseOrchestrator.create(config)
        return await orchestrator.run()
    except Exception as exc:
        logger.error("Release run failed", version=config.version, error=str(exc), error_type=type(exc).__name__, exc_info=True)
        result = orchestrator.result if orchestrator is not None else ReleaseResult(status=ReleaseStatus.ERROR, version=config.version)
        result.status = ReleaseStatus.ERROR
        result.error = str(exc) or type(exc).__name__
        return result
