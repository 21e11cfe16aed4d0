"""termux-bootstrap — 宿主应用包变体 / 包管理器元数据解析"""

__version__ = "0.1.0"
