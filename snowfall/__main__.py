from snowfall.app import main

main()
