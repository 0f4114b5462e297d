"""Resource collaborators — read-only project introspection."""
