"""CLI subcommands for semresolver."""
