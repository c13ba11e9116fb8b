"""Domain layer: pure Gemfile and gem-spec models with no I/O side effects."""
