"""Pipeline — callback chains, per-message options, and the compiler."""
