"""GitHub prerequisites checking."""

import logging

from .. import pretty
from ..errors import ReviewServiceNotAuthenticatedError, ReviewServiceNotAvailableError
from ..typing import ReviewService

logger = logging.getLogger(__name__)


def check_review_prerequisites(review: ReviewService, repo: str = "", host: str = "github.com") -> None:
    """Check the review service is reachable and authenticated.

    Raises:
        ReviewServiceNotAvailableError: no credentials were found
        ReviewServiceNotAuthenticatedError: credentials were rejected
    """
    if not review.is_available():
        pretty.echo(f"{pretty.WARNING} No GitHub token found.")
        pretty.echo(pretty.detail("Set GITHUB_TOKEN, or install the GitHub CLI and run: gh auth login"))
        if repo:
            pretty.echo(pretty.detail(f"Or create PRs manually at: https://{host}/{repo}"))
        raise ReviewServiceNotAvailableError()

    if not review.is_authenticated():
        pretty.echo(f"{pretty.WARNING} Not authenticated with GitHub.")
        pretty.echo(pretty.detail("Run: gh auth login"))
        raise ReviewServiceNotAuthenticatedError()

    logger.debug("GitHub prerequisites satisfied")
