from lichan.app import main

raise SystemExit(main())
