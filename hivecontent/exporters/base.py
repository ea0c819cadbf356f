"""base exporter interface."""

from abc import ABC, abstractmethod

from hivecontent.core.models import Post


class Exporter(ABC):  # pylint: disable=too-few-public-methods
    """abstract base class for rendered post exporters."""

    @abstractmethod
    def export(
        self,
        post: Post,
        destination: str,
        dry_run: bool = False,
        overwrite: bool = False,
    ) -> str:
        """
        Export a rendered post to the destination.

        Args:
            post: The post to render and export
            destination: Where to write the export (interpretation varies by exporter)
            dry_run: If True, don't actually write anything
            overwrite: If True, replace existing output

        Returns:
            one of "written", "skipped" or "dry-run"
        """
        ...  # pylint: disable=unnecessary-ellipsis
