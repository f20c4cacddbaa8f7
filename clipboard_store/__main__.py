from clipboard_store.server import main

raise SystemExit(main())
