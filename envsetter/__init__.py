"""
envsetter - 扫描代码库中的环境变量引用，交互式补全 .env 文件
"""

__version__ = "1.0.0"
