from taskwiz.cli.main import main

main()
