# Services module
