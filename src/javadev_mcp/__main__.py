from javadev_mcp.cli import main

main()
