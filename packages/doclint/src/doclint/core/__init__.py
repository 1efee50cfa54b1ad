"""Runtime plumbing shared by the checks, reporting and cli layers."""
