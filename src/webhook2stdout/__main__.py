from webhook2stdout.cli import main

main()
