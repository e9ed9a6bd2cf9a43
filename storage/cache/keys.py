KEY_PREFIX = "lifenav"


def make_response_key(user_id: str, source: str, bucket: str, prefix: str = KEY_PREFIX) -> str:
    return f"{prefix}:resp:{user_id}:{source}:{bucket}"


def make_token_key(user_id: str, prefix: str = KEY_PREFIX) -> str:
    return f"{prefix}:token:{user_id}"
