"""Table shape classification, structure extraction, and mobile conversion.

Submodules:
  patterns     -- marker vocabulary, class names, compiled regex patterns
  errors       -- exception hierarchy for conversion failures
  text         -- text normalisation shared by every extractor
  schema       -- TableShape / OutputKind enums and the Item pydantic models
  raw          -- read-only RawTable model and visual grid expansion
  classifiers  -- ordered shape predicates and classify()
  extractors   -- one structure extractor per table shape
  layouts      -- clean-list and carousel-slide harvesters
  markers      -- marker <-> table resolution
  registry     -- per-table conversion records
  rendering    -- default static HTML renderer
  pipeline     -- TableConverter orchestrator (convert / restore lifecycle)
"""
