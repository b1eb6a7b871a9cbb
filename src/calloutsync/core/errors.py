class HostUnavailable(RuntimeError):
    """No active editor, buffer or visual root to operate on."""
