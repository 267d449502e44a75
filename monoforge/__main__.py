from monoforge.cli import main

main()
