"""Host adapters embedding the macros in concrete UIs."""
