from propstack_mcp.server import main

main()
