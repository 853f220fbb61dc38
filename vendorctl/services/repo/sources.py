"""版本控制后端 - 支持 Git / Mercurial

所有后端实现同一个 Repository 协议，拉取编排器只依赖协议，
与具体 VCS 无关。命令通过 CommandExecutor 执行，测试时可注入假执行器。
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Protocol

from vendorctl.core.exceptions import ExecutionError, RepositoryError, ValidationError
from vendorctl.utils.shell import CommandExecutor, run_cmd

logger = logging.getLogger(__name__)

_SAFE_REF_RE = re.compile(r"^[a-zA-Z0-9_./@+\-]+$")


def _check_ref(ref: str) -> None:
    if not _SAFE_REF_RE.match(ref) or ref.startswith("-"):
        raise ValidationError(f"版本号包含非法字符: {ref}")


class Repository(Protocol):
    """单个远端代码仓在本地目录中的操作能力"""

    remote: str
    local: Path

    def check_local(self) -> bool:
        """本地目录是否已有可用的 checkout"""
        ...

    def fetch(self) -> None:
        """首次完整拉取到本地目录"""
        ...

    def update_to_version(self, version: str) -> None:
        """切换到指定版本（tag/分支/提交），不存在时抛 RepositoryError"""
        ...

    def update_to_latest(self) -> None:
        """从远端更新并切换到默认分支最新版本"""
        ...

    def current_version(self) -> str:
        """当前 checkout 的具体版本（提交 ID）"""
        ...


class _CommandRepository:
    """基于命令行工具的后端公共逻辑"""

    kind = ""

    def __init__(
        self,
        remote: str,
        local: str | Path,
        *,
        executor: CommandExecutor | None = None,
        timeout: int | None = None,
    ) -> None:
        self.remote = remote
        self.local = Path(local)
        self._executor = executor
        self._timeout = timeout

    def _run(self, *args: str, in_repo: bool = True) -> str:
        cmd = [self.kind, *args]
        try:
            r = run_cmd(
                cmd,
                cwd=str(self.local) if in_repo else None,
                executor=self._executor,
                timeout=self._timeout,
                label=f"{self.kind} {args[0]}",
            )
        except ExecutionError as e:
            raise RepositoryError(f"{self.remote}: {e}") from e
        return r.stdout

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.remote!r}, {str(self.local)!r})"


class GitRepository(_CommandRepository):
    """Git 代码仓"""

    kind = "git"

    def check_local(self) -> bool:
        return (self.local / ".git").is_dir()

    def fetch(self) -> None:
        self.local.parent.mkdir(parents=True, exist_ok=True)
        logger.info("git clone %s", self.remote)
        self._run("clone", "--quiet", "--", self.remote, str(self.local), in_repo=False)

    def update_to_version(self, version: str) -> None:
        _check_ref(version)
        self._run("checkout", "--quiet", "--detach", version)

    def update_to_latest(self) -> None:
        self._run("fetch", "--quiet", "--tags", "--force", "origin")
        self._run("remote", "set-head", "origin", "--auto")
        self._run("checkout", "--quiet", "--detach", "origin/HEAD")

    def current_version(self) -> str:
        return self._run("rev-parse", "HEAD").strip()


class HgRepository(_CommandRepository):
    """Mercurial 代码仓"""

    kind = "hg"

    def check_local(self) -> bool:
        return (self.local / ".hg").is_dir()

    def fetch(self) -> None:
        self.local.parent.mkdir(parents=True, exist_ok=True)
        logger.info("hg clone %s", self.remote)
        self._run("clone", "--quiet", "-U", "--", self.remote, str(self.local), in_repo=False)

    def update_to_version(self, version: str) -> None:
        _check_ref(version)
        self._run("update", "--quiet", "--clean", "-r", version)

    def update_to_latest(self) -> None:
        self._run("pull", "--quiet")
        self._run("update", "--quiet", "--clean", "-r", "default")

    def current_version(self) -> str:
        return self._run("log", "-r", ".", "--template", "{node}").strip()


_BACKENDS: dict[str, type[_CommandRepository]] = {
    "git": GitRepository,
    "hg": HgRepository,
}


def detect_kind(remote: str, local: Path) -> str:
    """推断后端类型: 已有 checkout > 远端后缀 > 默认 git"""
    for kind in ("git", "hg"):
        if (local / f".{kind}").is_dir():
            return kind
    if remote.rstrip("/").endswith(".hg"):
        return "hg"
    return "git"


def new_repository(
    remote: str,
    local: str | Path,
    *,
    kind: str = "",
    executor: CommandExecutor | None = None,
    timeout: int | None = None,
) -> Repository:
    """按类型构造 Repository

    Raises:
        ValidationError: 不支持的 VCS 类型
    """
    local = Path(local)
    kind = kind or detect_kind(remote, local)
    backend = _BACKENDS.get(kind)
    if backend is None:
        raise ValidationError(
            f"不支持的 VCS 类型: {kind}，可用: {', '.join(sorted(_BACKENDS))}"
        )
    return backend(remote, local, executor=executor, timeout=timeout)
