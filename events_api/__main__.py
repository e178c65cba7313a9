from events_api.app import main

main()
