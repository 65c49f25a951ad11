"""Tool orchestration.

Runs tools on behalf of the LLM runtime and writes their produced
datasets back into the conversation's dataset store.
"""
