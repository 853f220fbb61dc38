"""版本控制后端模块

- sources.py: Repository 协议与 Git / Mercurial 实现
"""

from vendorctl.services.repo.sources import (
    GitRepository,
    HgRepository,
    Repository,
    new_repository,
)

__all__ = [
    "Repository",
    "GitRepository",
    "HgRepository",
    "new_repository",
]
