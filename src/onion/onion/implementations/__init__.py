# ABOUTME: Implementations package for the onion core
# ABOUTME: Concrete memory-based and asyncio HTTP implementations of the interfaces
