"""JSON schema contracts for configuration and command output."""
