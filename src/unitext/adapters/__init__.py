"""Host adapters for unitext."""
