from taskdesk.cli.main import main

main()
