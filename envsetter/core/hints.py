"""
根据变量名推断取值提示、分组与敏感性
"""

import re
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ValueHint:
    """取值提示"""
    type: str
    hint: str


VALUE_HINTS: list[tuple[re.Pattern, ValueHint]] = [
    (re.compile(r"^(DATABASE_URL|DB_URL|POSTGRES_URL)$", re.I), ValueHint("URL", "Database connection string")),
    (re.compile(r"^(MONGO_URI|MONGODB_URI)$", re.I), ValueHint("URL", "MongoDB connection string")),
    (re.compile(r"^(REDIS_URL|REDIS_URI)$", re.I), ValueHint("URL", "Redis connection string")),
    (re.compile(r"^(NEXT_PUBLIC_|REACT_APP_|VITE_)?(API_URL|BASE_URL|APP_URL|SITE_URL|SERVER_URL|BACKEND_URL)$", re.I),
     ValueHint("URL", "HTTP endpoint")),
    (re.compile(r"SUPABASE_URL$", re.I), ValueHint("URL", "Supabase project URL")),
    (re.compile(r"PORT$", re.I), ValueHint("Number", "Port number")),
    (re.compile(r"(SECRET|TOKEN|API_KEY|PRIVATE_KEY|ACCESS_KEY|ANON_KEY|SERVICE_ROLE_KEY)$", re.I),
     ValueHint("Secret", "Sensitive, hidden input")),
    (re.compile(r"PASSWORD|PASS$", re.I), ValueHint("Secret", "Password, hidden input")),
    (re.compile(r"(SMTP_HOST|MAIL_HOST|EMAIL_HOST)$", re.I), ValueHint("Host", "Mail server hostname")),
    (re.compile(r"(SMTP_USER|MAIL_USER|EMAIL_USER|MAIL_FROM)$", re.I), ValueHint("Email", "Email address")),
    (re.compile(r"(S3_BUCKET|AWS_BUCKET|BUCKET_NAME)$", re.I), ValueHint("String", "Bucket name")),
    (re.compile(r"(AWS_REGION|REGION)$", re.I), ValueHint("Region", "Cloud region")),
    (re.compile(r"(DEBUG|VERBOSE|LOG_LEVEL)$", re.I), ValueHint("Flag", "true / false")),
    (re.compile(r"^(NEXT_PUBLIC_|REACT_APP_|VITE_)"), ValueHint("Public", "Exposed to browser")),
]

# 按前缀分组，用于交互时的分组标题
CATEGORIES: list[tuple[re.Pattern, str]] = [
    (re.compile(r"^(DATABASE|DB_|MONGO|POSTGRES|MYSQL|REDIS|SUPABASE)"), "Database"),
    (re.compile(r"^NEXT_PUBLIC_"), "Next.js (Public)"),
    (re.compile(r"^REACT_APP_"), "React (Public)"),
    (re.compile(r"^VITE_"), "Vite (Public)"),
    (re.compile(r"^(AWS_|S3_)"), "AWS"),
    (re.compile(r"^(SMTP_|MAIL_|EMAIL_)"), "Email"),
    (re.compile(r"^STRIPE_"), "Stripe"),
    (re.compile(r"^FIREBASE_"), "Firebase"),
    (re.compile(r"^(AUTH_|JWT_|SESSION_)"), "Auth"),
    (re.compile(r"^SENTRY_"), "Sentry"),
]

SENSITIVE_RE = re.compile(r"SECRET|TOKEN|PASSWORD|PASS|KEY|PRIVATE|AUTH|CREDENTIAL", re.I)

MASK = "••••••"


def get_value_hint(key: str) -> Optional[ValueHint]:
    """返回第一条匹配的取值提示"""
    for pattern, hint in VALUE_HINTS:
        if pattern.search(key):
            return hint
    return None


def get_category(key: str) -> Optional[str]:
    for pattern, category in CATEGORIES:
        if pattern.search(key):
            return category
    return None


def is_sensitive_key(key: str) -> bool:
    return bool(SENSITIVE_RE.search(key))


def mask_value(value: str) -> str:
    """遮盖当前值，只露出首尾少量字符"""
    if not value:
        return "(empty)"
    if len(value) <= 6:
        return MASK
    return value[:3] + "••••" + value[-2:]
