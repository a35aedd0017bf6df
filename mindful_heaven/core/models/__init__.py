"""Request and response schemas shared by the server and the client."""
