"""Allow ``python -m docscaffold``."""

from .cli import main

raise SystemExit(main())
