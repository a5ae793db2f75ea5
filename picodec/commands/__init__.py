"""Click subcommands registered on :data:`picodec.cli.cli`."""
