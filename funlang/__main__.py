from funlang.main import main


main()
