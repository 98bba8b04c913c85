"""Secret redaction for log lines and stored export errors."""

from __future__ import annotations

import os
import re
from base64 import b64encode
from typing import Iterable, Sequence
from urllib.parse import quote_plus

_SENSITIVE_KEY_PATTERN = re.compile(
    r"(?i)(?:^|[^a-z0-9])(?:token|secret|password|key|credential|auth)(?:$|[^a-z0-9])"
)


def _is_sensitive_key(key: str) -> bool:
    return bool(_SENSITIVE_KEY_PATTERN.search(key))


def _secret_variants(secret: str) -> set[str]:
    return {
        secret,
        b64encode(secret.encode()).decode(),
        quote_plus(secret),
    }


class SecretRedactor:
    """Replace known secret values, and their encoded forms, with a placeholder.

    Jira error payloads sometimes echo request headers back. Basic auth
    headers carry ``email:token`` in base64, so the encoded variants are
    scrubbed too.
    """

    def __init__(self, secrets: Iterable[str] | None = None, placeholder: str = "***") -> None:
        self._placeholder = placeholder
        unique: set[str] = set()
        for value in secrets or []:
            if not value:
                continue
            unique.update(variant for variant in _secret_variants(value) if variant)
        self._secrets: list[str] = sorted(unique, key=len, reverse=True)

    @classmethod
    def from_environ(
        cls, *, placeholder: str = "***", extra_secrets: Iterable[str] | None = None
    ) -> "SecretRedactor":
        secrets = [
            value
            for key, value in os.environ.items()
            if _is_sensitive_key(key) and value
        ]
        if extra_secrets:
            secrets.extend(secret for secret in extra_secrets if secret)
        return cls(secrets=secrets, placeholder=placeholder)

    def scrub(self, text: str | None) -> str:
        if not text:
            return ""
        scrubbed = text
        for secret in self._secrets:
            scrubbed = scrubbed.replace(secret, self._placeholder)
        return scrubbed

    def scrub_sequence(self, values: Sequence[str]) -> list[str]:
        return [self.scrub(value) for value in values]


__all__ = ["SecretRedactor"]
