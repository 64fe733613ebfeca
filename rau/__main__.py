from rau.cli.app import main

main()
