"""vendorctl - Go 依赖增量 vendor 工具"""

__version__ = "0.1.0"
