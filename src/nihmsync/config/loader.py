"""Settings for the NIHMS transform/load core."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError

DEFAULT_PMC_URL_TEMPLATE: Final[str] = "https://www.ncbi.nlm.nih.gov/pmc/articles/PMC{pmc_id}/"


@dataclass(frozen=True, slots=True)
class LoaderConfig:
    """Values the transformer needs that would otherwise be ambient globals.

    ``repository_uri`` is the catalog reference of the NIHMS repository that every
    RepositoryCopy, Deposit and Submission produced by the loader points at.
    ``pmc_url_template`` is formatted with ``pmc_id`` to build access URLs.
    """

    repository_uri: str
    pmc_url_template: str = DEFAULT_PMC_URL_TEMPLATE

    def __post_init__(self) -> None:
        if not self.repository_uri.strip():
            raise ConfigurationError("NIHMS repository URI cannot be blank")
        if "{pmc_id}" not in self.pmc_url_template:
            raise ConfigurationError(
                f"PMC URL template must contain a {{pmc_id}} placeholder: {self.pmc_url_template}"
            )


def get_loader_config() -> LoaderConfig:
    values = require_env_vars(("NIHMS_REPOSITORY_URI",))
    template = optional_env_var("PMC_URL_TEMPLATE") or DEFAULT_PMC_URL_TEMPLATE
    return LoaderConfig(repository_uri=values["NIHMS_REPOSITORY_URI"], pmc_url_template=template)
