# ABOUTME: Interfaces package for the onion core
# ABOUTME: Abstract contracts for middleware, the error channel and the transport boundary
