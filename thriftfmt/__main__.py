from thriftfmt.cli import main

raise SystemExit(main())
