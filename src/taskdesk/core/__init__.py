"""
Core building blocks shared by the controllers.

Components:
- ports.py: Protocols the controllers depend on (Notifier, SessionStorage, TaskRepo)
- observable.py: ObservableValue publish/subscribe channel
- forms.py: typed FieldValue input and schema checks
- state.py: AppState container built by the CLI bootstrap
"""
