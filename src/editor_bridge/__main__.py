from editor_bridge.cli import main

raise SystemExit(main())
