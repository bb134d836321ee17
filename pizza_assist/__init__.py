"""Pizza Assist: menu search and natural-language cart planning."""
