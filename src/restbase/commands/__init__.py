"""Built-in CLI commands for restbase.

Each module defines a Typer sub-application or command function that is
registered on the root app in :mod:`restbase.app`:

- :mod:`~restbase.commands.request` -- ``get``, ``cats`` and ``swapi``.
- :mod:`~restbase.commands.cache` -- ``cache stats`` and ``cache clear``.
- :mod:`~restbase.commands.config` -- ``config show`` and ``config set``.
"""
