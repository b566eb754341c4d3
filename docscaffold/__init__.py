"""docscaffold -- bootstrap an MkDocs Material documentation repository.

Quick usage::

    from docscaffold import Config, SiteGenerator

    result = SiteGenerator(Config(output_dir=Path("./site"))).generate()
"""

from docscaffold.config import Config, RepositoryConfig, SiteConfig
from docscaffold.generator import ScaffoldError, ScaffoldResult, SiteGenerator
from docscaffold.navigation import SiteConfigError, SiteReport, check_site
from docscaffold.publish import PublishError, PublishReport, RepoPublisher
from docscaffold.templates import TemplateRenderer

__version__ = "0.1.0"

__all__ = [
    "Config",
    "PublishError",
    "PublishReport",
    "RepoPublisher",
    "RepositoryConfig",
    "ScaffoldError",
    "ScaffoldResult",
    "SiteConfig",
    "SiteConfigError",
    "SiteGenerator",
    "SiteReport",
    "TemplateRenderer",
    "check_site",
]
