"""Built-in CLI sub-commands for meshclient."""
