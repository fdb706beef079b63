"""
Direct messaging between two users.

Components:
    models: Message
    services: MessageService (store + read state), ConversationService (chat list)
    authorization: Sender and edit-window checks
    events: Realtime payloads and publishing
    views/urls: REST API
"""
