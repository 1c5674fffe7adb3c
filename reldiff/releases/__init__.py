"""Release comparison.

- fetch: paged retrieval of every release of a repository
- filters: tag pattern, pre-release and draft predicates
- semver / sequence: tag parsing and precedence ordering
- distance: ordinal distance and notes between two tags
- session: validation and orchestration of one comparison
"""

from __future__ import annotations
