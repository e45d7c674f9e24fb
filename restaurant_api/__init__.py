"""Restaurant Web API — CRUD and paged listing for restaurant records."""
