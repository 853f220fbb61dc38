"""统一异常体系

所有业务异常继承 VendorError。
CLI 层据此输出友好提示并以非零状态码退出。
"""

from __future__ import annotations


class VendorError(Exception):
    """vendorctl 基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(VendorError):
    """清单/配置文件缺失、版本过新或内容无效"""

    code = "CONFIG_ERROR"


class ValidationError(VendorError):
    """输入数据校验失败"""

    code = "VALIDATION_ERROR"


class NotRepositoryRootError(ValidationError):
    """导入路径不是代码仓根包"""

    code = "NOT_REPO_ROOT"

    def __init__(self, package: str, root: str) -> None:
        super().__init__(
            f"包 {package} 不是代码仓根包，请改用 {root}"
        )
        self.package = package
        self.root = root


class ExecutableRootError(ValidationError):
    """根包是可执行程序（package main），不能作为依赖 vendor"""

    code = "EXECUTABLE_ROOT"


class PackageNotFoundError(ValidationError):
    """清单中不存在指定的包"""

    code = "PACKAGE_NOT_FOUND"


class FetchError(VendorError):
    """拉取依赖包失败"""

    code = "FETCH_ERROR"


class RepositoryError(FetchError):
    """版本控制命令执行失败"""

    code = "REPOSITORY_ERROR"


class CacheLockError(FetchError):
    """缓存目录被其他进程锁定"""

    code = "CACHE_LOCKED"


class ExecutionError(VendorError):
    """子进程执行失败"""

    code = "EXECUTION_ERROR"


class VendorFileError(VendorError):
    """文件系统读写失败"""

    code = "FILE_ERROR"


class CopyConflictError(VendorFileError):
    """复制目标文件已存在（说明遍历算法出现重复访问）"""

    code = "COPY_CONFLICT"
