"""Use-case orchestration on top of the domain and adapter contracts."""
