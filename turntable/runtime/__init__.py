"""Runtime support: catalog loading and concurrency helpers."""
