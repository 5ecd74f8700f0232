from pushit.cli.app import main

main()
