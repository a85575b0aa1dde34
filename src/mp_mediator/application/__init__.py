"""Application layer – the mediator and its built-in behaviours."""
