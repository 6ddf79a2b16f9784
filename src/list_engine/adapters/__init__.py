"""Host adapters that wire the list engine into UI toolkits."""
