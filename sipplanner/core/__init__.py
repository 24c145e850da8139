"""Pure calculation modules. Nothing in here performs I/O."""
