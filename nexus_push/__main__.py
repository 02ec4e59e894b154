from nexus_push.main import main

main()
