def utc_iso(moment):
    """Columns hold naive UTC; mark them as such on the wire."""
    return f"{moment.isoformat()}Z" if moment else None
