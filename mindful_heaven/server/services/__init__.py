"""
Service layer of the Mindful Heaven server.

Business logic shared by the API routers: the completion relay, email
delivery, object storage, account and password-reset flows, chat history,
peer messaging and notifications.
"""
