"""Host adapters embedding the editor core."""
