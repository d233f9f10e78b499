from stargate_mcp.server import main

main()
