"""Library layer shared by the engine, the rule checks and the CLI."""
