import hmac


def passwords_match(expected: str, provided: str) -> bool:
    return hmac.compare_digest(expected.encode("utf-8"), (provided or "").encode("utf-8"))
