"""Key namespacing: ``namespace:key`` when a namespace is configured."""
NAMESPACE_SEPARATOR = ":"


def make_key(namespace: str, key: str) -> str:
    if not namespace:
        return key
    return f"{namespace}{NAMESPACE_SEPARATOR}{key}"


def strip_key(namespace: str, stored_key: str) -> str | None:
    """Inverse of make_key; None if ``stored_key`` is outside the namespace."""
    if not namespace:
        return stored_key
    head = f"{namespace}{NAMESPACE_SEPARATOR}"
    if stored_key.startswith(head):
        return stored_key[len(head):]
    return None
