"""Feature modules: tenants and the tenant-scoped entities."""
