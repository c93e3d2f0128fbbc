from histsuggest.cli import main

raise SystemExit(main())
