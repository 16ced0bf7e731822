"""Cosmos DB access: tenant handle pool, store adapter and repositories."""
