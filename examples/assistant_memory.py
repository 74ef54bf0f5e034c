"""
Example: Conversational memory across assistant turns

Demonstrates:
1. Opening a turn (session reuse, prior history, relevant memories)
2. Saving a memory through the save_memory tool handler
3. Recalling it in a later turn with recall_memory

Runs without an API key: memories are then stored unembedded and found
through lexical search.
"""

import asyncio

from recruit_memory import ConversationMemoryService, EmbeddingService, Settings
from recruit_memory.assistant import AssistantSessionManager, recall_memory, save_memory
from recruit_memory.storage import InMemoryConversationStore


async def main():
    settings = Settings.from_env()
    memory = ConversationMemoryService.from_settings(
        InMemoryConversationStore(), EmbeddingService.from_settings(settings), settings
    )
    sessions = AssistantSessionManager(memory)

    turn = await sessions.begin_turn("org-1", "recruiter@example.com", "I prefer candidates with Rust experience")
    print(f"Session: {turn.session_id} (history={len(turn.history)})")
    result = await save_memory(
        memory,
        turn.org_id,
        turn.user_id,
        turn.session_id,
        {"content": "Prefers candidates with Rust experience", "memory_type": "preference"},
    )
    print(f"save_memory -> {result}")
    await sessions.finish_turn(turn, "Noted, I'll prioritise Rust experience.")

    turn = await sessions.begin_turn("org-1", "recruiter@example.com", "What did I say about Rust?")
    print(f"Session: {turn.session_id} (history={len(turn.history)})")
    for message in turn.history:
        print(f"  {message.role}: {message.content}")

    result = await recall_memory(memory, turn.org_id, turn.user_id, {"query": "Rust experience"})
    print(f"recall_memory -> {result}")
    await sessions.finish_turn(turn, "You said you prefer candidates with Rust experience.")

    session = await memory.get_session(turn.session_id)
    print(f"Messages in session: {session.message_count}")


if __name__ == "__main__":
    asyncio.run(main())
