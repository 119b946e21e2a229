def format_size(size_bytes: int) -> str:
    """
    Human-readable archive size in the form ``~12 MB (12582912 B)``.
    """
    return f"~{round(size_bytes / (1024 * 1024))} MB ({size_bytes} B)"
