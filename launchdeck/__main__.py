from launchdeck.main import main

main()
