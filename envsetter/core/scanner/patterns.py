"""
正则表达式模式定义

环境变量引用的匹配规则、黑名单以及扫描用的文件列表。
每条规则独立匹配，结果取并集；新的写法只需追加一条规则。
"""

import re
from dataclasses import dataclass
from typing import Iterator

# 变量名形状：大写蛇形
VAR_NAME = r"[A-Z][A-Z0-9_]+"
VAR_NAME_RE = re.compile(rf"^{VAR_NAME}$")

MIN_NAME_LENGTH = 3


@dataclass(frozen=True)
class EnvPattern:
    """
    单条匹配规则

    Attributes:
        convention: 引用写法 (member / bracket / call / prefix / interpolation)
        ecosystem: 来源生态 (node, vite, python, ruby ...)
        regex: 第 1 组捕获变量名
    """
    convention: str
    ecosystem: str
    regex: re.Pattern

    def extract(self, text: str) -> Iterator[str]:
        """从文本中提取候选变量名（未过滤）"""
        for match in self.regex.finditer(text):
            name = match.group(1)
            if name:
                yield name


ENV_PATTERNS: list[EnvPattern] = [
    # process.env.VAR / process.env['VAR']
    EnvPattern("member", "node", re.compile(rf"process\.env\.({VAR_NAME})")),
    EnvPattern("bracket", "node", re.compile(rf"process\.env\[['\"]({VAR_NAME})['\"]\]")),
    # import.meta.env.VAR
    EnvPattern("member", "vite", re.compile(rf"import\.meta\.env\.({VAR_NAME})")),
    # 前端构建工具约定的公开前缀，任意上下文
    EnvPattern("prefix", "next", re.compile(r"\b(NEXT_PUBLIC_[A-Z0-9_]+)\b")),
    EnvPattern("prefix", "react", re.compile(r"\b(REACT_APP_[A-Z0-9_]+)\b")),
    EnvPattern("prefix", "vite", re.compile(r"\b(VITE_[A-Z0-9_]+)\b")),
    EnvPattern("prefix", "nuxt", re.compile(r"\b(NUXT_[A-Z0-9_]+)\b")),
    EnvPattern("prefix", "expo", re.compile(r"\b(EXPO_PUBLIC_[A-Z0-9_]+)\b")),
    # os.environ.get("VAR") / os.environ["VAR"] / os.getenv("VAR")
    EnvPattern("call", "python", re.compile(rf"os\.environ\.get\(\s*['\"]({VAR_NAME})['\"]")),
    EnvPattern("bracket", "python", re.compile(rf"os\.environ\[['\"]({VAR_NAME})['\"]\]")),
    EnvPattern("call", "python", re.compile(rf"os\.getenv\(\s*['\"]({VAR_NAME})['\"]")),
    # ENV["VAR"] / ENV.fetch("VAR")
    EnvPattern("bracket", "ruby", re.compile(rf"ENV\[['\"]({VAR_NAME})['\"]\]")),
    EnvPattern("call", "ruby", re.compile(rf"ENV\.fetch\(\s*['\"]({VAR_NAME})['\"]")),
    # env("VAR") - Laravel
    EnvPattern("call", "php", re.compile(rf"env\(\s*['\"]({VAR_NAME})['\"]")),
    EnvPattern("call", "java", re.compile(rf"System\.getenv\(\s*['\"]({VAR_NAME})['\"]")),
    EnvPattern("call", "go", re.compile(rf"os\.Getenv\(\s*['\"]({VAR_NAME})['\"]")),
    EnvPattern("call", "rust", re.compile(rf"std::env::var\(\s*['\"]({VAR_NAME})['\"]")),
    # ${VAR} - YAML / docker-compose
    EnvPattern("interpolation", "compose", re.compile(rf"\$\{{({VAR_NAME})\}}")),
    # $VAR - shell / Dockerfile
    EnvPattern("interpolation", "shell", re.compile(rf"\$({VAR_NAME})\b")),
]

# 运行时/系统提供的变量，永远不作为发现结果
BLACKLIST: frozenset[str] = frozenset({
    "NODE_ENV", "HOME", "PATH", "USER", "SHELL", "PWD", "LANG", "TERM",
    "HOSTNAME", "OLDPWD", "EDITOR", "TMPDIR", "TMP", "TEMP", "CI", "NODE",
    "NPM", "NVM", "SHLVL", "LOGNAME", "LC_ALL", "LC_CTYPE", "DISPLAY",
    "COLORTERM", "COLUMNS", "LINES", "SSH_AUTH_SOCK", "SSH_CLIENT",
    "SSH_CONNECTION", "SSH_TTY", "XDG_SESSION_ID", "XDG_RUNTIME_DIR",
    "XDG_DATA_DIRS", "XDG_CONFIG_DIRS", "DBUS_SESSION_BUS_ADDRESS", "MAIL",
    "MANPATH", "PAGER", "LESS", "_",
})

# 深度扫描的文件后缀（按文件名结尾匹配，允许多段后缀如 env.example）
CODE_EXTENSIONS: tuple[str, ...] = (
    "js", "jsx", "ts", "tsx", "mjs", "cjs",
    "py", "rb", "php", "go", "rs", "java",
    "vue", "svelte", "astro",
    "yml", "yaml", "toml",
    "sh", "bash", "zsh",
    "env.example", "env.sample", "env.template",
    "Dockerfile",
)

# 无后缀但需要扫描的常见文件
EXTRA_FILES: frozenset[str] = frozenset({
    "Dockerfile",
    "docker-compose.yml",
    "docker-compose.yaml",
    ".env.example",
    ".env.sample",
    ".env.template",
    ".env.local.example",
    "Makefile",
})

# 运行时使用的 env 文件，内容单独读取，深度扫描时跳过
RUNTIME_ENV_FILES: frozenset[str] = frozenset({".env", ".env.local"})

# 浅扫描读取的 env 文件（按顺序）
ENV_SOURCE_FILES: tuple[str, ...] = (
    ".env",
    ".env.local",
    ".env.development",
    ".env.production",
    ".env.example",
    ".env.sample",
    ".env.template",
    ".env.local.example",
)

# 目录发现时识别的 env 文件名
ENV_FOLDER_MARKERS: tuple[str, ...] = (
    ".env",
    ".env.local",
    ".env.development",
    ".env.production",
    ".env.example",
    ".env.sample",
    ".env.template",
)

# 可作为写入目标的标准 env 文件
WRITABLE_ENV_FILES: tuple[str, ...] = (".env", ".env.local", ".env.development", ".env.production")


def is_candidate(name: str) -> bool:
    """黑名单与最短长度过滤"""
    if name in BLACKLIST:
        return False
    return len(name) >= MIN_NAME_LENGTH


def is_env_key(key: str) -> bool:
    """env 文件中的 key 是否符合变量名形状且不在黑名单中"""
    return bool(VAR_NAME_RE.match(key)) and key not in BLACKLIST


def extract_candidates(text: str) -> set[str]:
    """对文本应用全部规则，返回过滤后的变量名集合"""
    names: set[str] = set()
    for pattern in ENV_PATTERNS:
        for name in pattern.extract(text):
            if is_candidate(name):
                names.add(name)
    return names


def has_code_extension(filename: str) -> bool:
    """文件名是否以允许的后缀结尾，或是无后缀的已知文件"""
    if filename in EXTRA_FILES:
        return True
    return any(filename.endswith("." + ext) for ext in CODE_EXTENSIONS)