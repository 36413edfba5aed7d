from gemrun_arcade.main import main

raise SystemExit(main())
