"""Core application plumbing: settings and logging."""
