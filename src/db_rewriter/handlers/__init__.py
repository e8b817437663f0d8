"""
Custom Handlers Package.

Argument-aware rewrites for catalog entries flagged as custom handling. Each
module registers its functions with `register_custom_handler`; modules are
discovered by `db_rewriter.core.custom.load_handlers`, so adding a file here
is enough to activate a handler.

Implemented: `db_delete`. The remaining custom-handled names (`db_insert`,
`db_merge`, `db_query`, ...) are left unchanged until a handler exists.
"""
