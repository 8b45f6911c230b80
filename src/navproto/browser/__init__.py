"""Browser-facing building blocks (Playwright sync API).

``session`` wraps a Playwright ``Page`` with polling configuration;
``locator``, ``waits``, ``actions``, ``screenshots`` and ``scroll`` are the
collaborators the navigation protocol delegates to.
"""
