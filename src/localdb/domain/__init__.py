"""Domain layer - database identity, file layout and operation results."""
