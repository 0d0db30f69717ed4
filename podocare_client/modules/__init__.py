"""Resource modules: one schema set and repository per backend resource."""
