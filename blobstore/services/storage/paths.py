"""Object key normalization."""


def normalize_file_path(file_path: str, base_url: str = "") -> str:
    """
    Turn a caller-supplied file path into an object key.

    Removes the base URL prefix, then one leading slash, then one trailing
    slash. Each step runs at most once, so repeated slashes are only
    trimmed by one on each side.

    Examples:
        >>> normalize_file_path("/images/a.jpg/")
        'images/a.jpg'
        >>> normalize_file_path("http://cdn.test/images/a.jpg", "http://cdn.test")
        'images/a.jpg'
        >>> normalize_file_path("//a.jpg//")
        '/a.jpg/'
    """
    if file_path.startswith(base_url):
        file_path = file_path[len(base_url):]
    if file_path.startswith("/"):
        file_path = file_path[1:]
    if file_path.endswith("/"):
        file_path = file_path[:-1]

    return file_path
