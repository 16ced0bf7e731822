"""Per-tenant store of versioned models and twiglets with changelogs."""
