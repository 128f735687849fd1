from segrel.cli import main

raise SystemExit(main())
