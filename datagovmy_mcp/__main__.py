from datagovmy_mcp.cli import main

main()
