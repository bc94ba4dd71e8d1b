from webseed.main import main

main()
