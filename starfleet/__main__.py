from starfleet.main import main

raise SystemExit(main())
